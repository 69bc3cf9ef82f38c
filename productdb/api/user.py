"""
User endpoints: looking up products, proposing new products and reporting
products that are missing from the catalog.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from productdb.core.errors import NotFoundError
from productdb.deps import get_db
from productdb.schemas.missing_product import MissingProductReportRequest
from productdb.schemas.product import ProductDescription
from productdb.schemas.query import EntityKind, ProductQuery
from productdb.schemas.responses import (
    GetProductResponse,
    MissingProductReportResponse,
    ProductQueryResponse,
    ProductRequestResponse,
)
from productdb.services import entity_store, missing_products, query_engine
from productdb.services.images import ImageSlot, get_image

router = APIRouter(prefix="/user", tags=["user"])


@router.post(
    "/missing_products",
    response_model=MissingProductReportResponse,
    status_code=status.HTTP_201_CREATED,
)
def report_missing_product(
    report: MissingProductReportRequest, db: Session = Depends(get_db)
):
    report_id, date = missing_products.report_missing(db, report.product_id)
    return MissingProductReportResponse(
        message="Missing product reported", date=date, id=report_id
    )


@router.post(
    "/product_request",
    response_model=ProductRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
def request_new_product(description: ProductDescription, db: Session = Depends(get_db)):
    request_id, date = entity_store.create_request(db, description)
    return ProductRequestResponse(message="Product requested", date=date, id=request_id)


@router.get(
    "/product/{product_id}",
    response_model=GetProductResponse,
    response_model_exclude_unset=True,
)
def get_product(
    product_id: str,
    with_preview: bool = Query(False),
    with_full_image: bool = Query(False),
    db: Session = Depends(get_db),
):
    product = entity_store.get_product(db, product_id, with_preview, with_full_image)
    if product is None:
        raise NotFoundError(f"No product with id {product_id}")
    return GetProductResponse(message="Product found", product=product)


@router.get("/product/{product_id}/image")
def get_product_image(
    product_id: str,
    slot: ImageSlot = Query(ImageSlot.FULL),
    db: Session = Depends(get_db),
):
    image = get_image(db, EntityKind.PRODUCT, product_id, slot)
    return Response(content=image.data, media_type=image.content_type)


@router.get("/product_request/{request_id}/image")
def get_product_request_image(
    request_id: int,
    slot: ImageSlot = Query(ImageSlot.FULL),
    db: Session = Depends(get_db),
):
    image = get_image(db, EntityKind.REQUEST, request_id, slot)
    return Response(content=image.data, media_type=image.content_type)


@router.post(
    "/product/query",
    response_model=ProductQueryResponse,
    response_model_exclude_unset=True,
)
def query_products(
    product_query: ProductQuery,
    with_preview: bool = Query(False),
    db: Session = Depends(get_db),
):
    products = query_engine.query_products(db, product_query, with_preview)
    return ProductQueryResponse(message=f"Found {len(products)} product(s)", products=products)
