from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ImageInput(BaseModel):
    """One photographed item, already base64-encoded by the client."""

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field(..., alias="mimeType")
    data: str


class CompareRequest(BaseModel):
    model_config = {"extra": "ignore"}

    images: List[ImageInput] = Field(..., min_length=1)


class RankedItem(BaseModel):
    name: str
    description: str
    price: str
    rank: float


class UnitPrice(BaseModel):
    name: str
    unit_price: str


class UnitComparison(BaseModel):
    title: str
    items: List[UnitPrice]


class ComparisonResult(BaseModel):
    """Shape of a successful answer. Only used to document the endpoint; the
    model's JSON is relayed without being re-validated against it."""

    comparison_summary: str
    reasoning: str
    items: List[RankedItem]
    unit_comparisons: List[UnitComparison]


class ErrorResponse(BaseModel):
    error: str
