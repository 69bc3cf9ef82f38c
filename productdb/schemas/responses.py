from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel

from productdb.schemas.missing_product import MissingProduct
from productdb.schemas.product import ProductDescription
from productdb.schemas.request import ProductRequest


class OnlyMessageResponse(BaseModel):
    message: str


class NewProductResponse(BaseModel):
    message: str
    id: str


class ProductRequestResponse(BaseModel):
    """Answer to a product request or a missing product report."""
    message: str
    date: Optional[datetime] = None
    id: Optional[int] = None


MissingProductReportResponse = ProductRequestResponse


class GetProductResponse(BaseModel):
    message: str
    product: ProductDescription


class GetProductRequestResponse(BaseModel):
    message: str
    product_request: ProductRequest


class GetReportedMissingProductResponse(BaseModel):
    message: str
    missing_product: MissingProduct


class ProductQueryResponse(BaseModel):
    message: str
    products: List[Tuple[int, ProductDescription]]


class ProductRequestQueryResponse(BaseModel):
    message: str
    product_requests: List[Tuple[int, ProductRequest]]


class MissingProductsQueryResponse(BaseModel):
    message: str
    missing_products: List[Tuple[int, MissingProduct]]
