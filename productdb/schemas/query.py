"""
Query parameters shared by the list operations.

The search filter is a closed union of three variants. In JSON it is either
the string "no_filter", {"search": "..."} or {"product_id": "..."}.
"""
import enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class EntityKind(str, enum.Enum):
    PRODUCT = "product"
    REQUEST = "product_request"
    MISSING = "missing_product"


class NoFilter(BaseModel):
    """Matches everything."""
    model_config = ConfigDict(extra="forbid", frozen=True)


class TextSearch(BaseModel):
    """Matches product names by trigram similarity."""
    query: str = Field(alias="search", min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ExactId(BaseModel):
    """Matches the external product id exactly."""
    external_id: str = Field(alias="product_id", min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


SearchFilter = Union[NoFilter, TextSearch, ExactId]


class SortingField(str, enum.Enum):
    REPORTED_DATE = "reported_date"
    PRODUCT_NAME = "product_name"
    PRODUCT_ID = "product_id"
    SIMILARITY = "similarity"


class SortingOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class Sorting(BaseModel):
    field: SortingField
    order: SortingOrder


class ProductQuery(BaseModel):
    """Query for products or product requests."""
    offset: int = 0
    # required, but checked by the query engine
    limit: Optional[int] = None
    filter: SearchFilter = Field(default_factory=NoFilter)
    sorting: Optional[Sorting] = None

    @field_validator("filter", mode="before")
    @classmethod
    def parse_no_filter(cls, value):
        if value is None or value == "no_filter":
            return NoFilter()
        return value

    @field_serializer("filter")
    def serialize_filter(self, value: SearchFilter):
        if isinstance(value, NoFilter):
            return "no_filter"
        return value.model_dump(by_alias=True)


class MissingProductQuery(BaseModel):
    """Query for missing product reports, always sorted by report date."""
    offset: int = 0
    limit: Optional[int] = None
    product_id: Optional[str] = None
    order: SortingOrder = SortingOrder.ASC
