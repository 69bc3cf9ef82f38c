"""
Admin endpoints: publishing and deleting products, reviewing product
requests and missing product reports.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from productdb.core.errors import NotFoundError
from productdb.deps import get_db, verify_admin_token
from productdb.schemas.product import ProductDescription
from productdb.schemas.query import MissingProductQuery, ProductQuery
from productdb.schemas.responses import (
    GetProductRequestResponse,
    GetReportedMissingProductResponse,
    MissingProductsQueryResponse,
    NewProductResponse,
    OnlyMessageResponse,
    ProductRequestQueryResponse,
)
from productdb.services import entity_store, missing_products, query_engine

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(verify_admin_token)],
)


@router.post(
    "/product",
    response_model=NewProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def new_product(description: ProductDescription, db: Session = Depends(get_db)):
    product_id = entity_store.create_product(db, description)
    return NewProductResponse(message="Product created", id=product_id)


@router.delete("/product/{product_id}", response_model=OnlyMessageResponse)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    entity_store.delete_product(db, product_id)
    return OnlyMessageResponse(message="Product deleted")


@router.get(
    "/product_request/{request_id}",
    response_model=GetProductRequestResponse,
    response_model_exclude_unset=True,
)
def get_product_request(
    request_id: int,
    with_preview: bool = Query(False),
    with_full_image: bool = Query(False),
    db: Session = Depends(get_db),
):
    product_request = entity_store.get_request(db, request_id, with_preview, with_full_image)
    if product_request is None:
        raise NotFoundError(f"No product request with id {request_id}")
    return GetProductRequestResponse(message="Product request found", product_request=product_request)


@router.delete("/product_request/{request_id}", response_model=OnlyMessageResponse)
def delete_product_request(request_id: int, db: Session = Depends(get_db)):
    entity_store.delete_request(db, request_id)
    return OnlyMessageResponse(message="Product request deleted")


@router.post(
    "/product_request/query",
    response_model=ProductRequestQueryResponse,
    response_model_exclude_unset=True,
)
def query_product_requests(
    product_query: ProductQuery,
    with_preview: bool = Query(False),
    db: Session = Depends(get_db),
):
    product_requests = query_engine.query_requests(db, product_query, with_preview)
    return ProductRequestQueryResponse(
        message=f"Found {len(product_requests)} product request(s)",
        product_requests=product_requests,
    )


@router.get("/missing_products/{report_id}", response_model=GetReportedMissingProductResponse)
def get_missing_product(report_id: int, db: Session = Depends(get_db)):
    missing_product = missing_products.get_missing(db, report_id)
    if missing_product is None:
        raise NotFoundError(f"No missing product report with id {report_id}")
    return GetReportedMissingProductResponse(
        message="Missing product report found", missing_product=missing_product
    )


@router.delete("/missing_products/{report_id}", response_model=OnlyMessageResponse)
def delete_reported_missing_product(report_id: int, db: Session = Depends(get_db)):
    missing_products.delete_missing(db, report_id)
    return OnlyMessageResponse(message="Missing product report deleted")


@router.post("/missing_products/query", response_model=MissingProductsQueryResponse)
def query_missing_products(missing_query: MissingProductQuery, db: Session = Depends(get_db)):
    reports = query_engine.query_missing(db, missing_query)
    return MissingProductsQueryResponse(
        message=f"Found {len(reports)} missing product report(s)",
        missing_products=reports,
    )
