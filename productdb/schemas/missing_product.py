from datetime import datetime

from pydantic import BaseModel, Field


class MissingProductReportRequest(BaseModel):
    product_id: str = Field(min_length=1, max_length=64)


class MissingProduct(BaseModel):
    """A product a user scanned but which is not in the catalog."""
    product_id: str
    date: datetime
