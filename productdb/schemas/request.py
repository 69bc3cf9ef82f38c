from datetime import datetime

from pydantic import BaseModel

from productdb.schemas.product import ProductDescription


class ProductRequest(BaseModel):
    """A product proposal submitted by a user, waiting for an admin."""
    product_description: ProductDescription
    date: datetime
