COMPARISON_SYSTEM = (
    "You are an expert AI assistant specializing in comparing grocery prices from multiple images. "
    "For each image, identify the item, extract its price, and apply any visible discounts. "
    "First, present each item's details individually. "
    "Second, determine several logical common units (e.g., per lb, per oz, per kg, per 100g). "
    "Third, create an array of summary cards, one for each common unit, comparing all items by that unit "
    "with prices sorted from lowest to highest. "
    "Respond ONLY with the specified JSON object."
)

COMPARISON_USER_TEMPLATE = (
    "Analyze these {image_count} images. "
    "Provide a summary of your findings in the requested JSON format."
)

# Gemini schema dialect: upper-case type names, "required" lists per object.
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "comparison_summary": {"type": "STRING"},
        "reasoning": {"type": "STRING"},
        "items": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "price": {"type": "STRING"},
                    "rank": {"type": "NUMBER"},
                },
                "required": ["name", "description", "price", "rank"],
            },
        },
        "unit_comparisons": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "items": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "name": {"type": "STRING"},
                                "unit_price": {"type": "STRING"},
                            },
                            "required": ["name", "unit_price"],
                        },
                    },
                },
                "required": ["title", "items"],
            },
        },
    },
    "required": ["comparison_summary", "reasoning", "items", "unit_comparisons"],
}
