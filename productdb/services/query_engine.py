"""
Filtered, sorted and paginated listing of products, product requests and
missing product reports.

Filters and sorting fields are closed enumerations which are matched one by
one onto SQLAlchemy expressions. Whenever the primary sort key ties, rows are
ordered by their internal id, so paging through unchanged data is stable.

Text search compares the query with the whole product name (pg_trgm
`similarity`, not `word_similarity`). Every extra word in a name adds
trigrams, so a long name containing the query word can score below
`settings.similarity_threshold` and is then not matched.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, contains_eager, joinedload

from productdb import models
from productdb.core.config import settings
from productdb.core.errors import ValidationError
from productdb.schemas.missing_product import MissingProduct
from productdb.schemas.product import ProductDescription
from productdb.schemas.query import (
    EntityKind,
    ExactId,
    MissingProductQuery,
    NoFilter,
    ProductQuery,
    SearchFilter,
    Sorting,
    SortingField,
    SortingOrder,
    TextSearch,
)
from productdb.schemas.request import ProductRequest
from productdb.services.description_mapper import as_utc, description_from_row

logger = logging.getLogger(__name__)


def check_page(offset: Optional[int], limit: Optional[int]) -> None:
    if limit is None:
        raise ValidationError("The limit is required")
    if limit <= 0:
        raise ValidationError(f"The limit must be positive, got {limit}")
    if limit > settings.max_query_limit:
        raise ValidationError(
            f"The limit must not exceed {settings.max_query_limit}, got {limit}"
        )
    if offset is None or offset < 0:
        raise ValidationError(f"The offset must not be negative, got {offset}")


def _id_column(kind: EntityKind):
    if kind == EntityKind.PRODUCT:
        return models.ProductDescription.id
    if kind == EntityKind.REQUEST:
        return models.RequestedProduct.id
    return models.MissingProductReport.id


def _product_id_column(kind: EntityKind):
    if kind == EntityKind.MISSING:
        return models.MissingProductReport.product_id
    return models.ProductDescription.product_id


def _similarity(search_filter: TextSearch):
    return func.similarity(models.ProductDescription.name, search_filter.query)


def _filter_clause(kind: EntityKind, search_filter: SearchFilter):
    if isinstance(search_filter, NoFilter):
        return None
    if isinstance(search_filter, ExactId):
        return _product_id_column(kind) == search_filter.external_id
    if isinstance(search_filter, TextSearch):
        if kind == EntityKind.MISSING:
            raise ValidationError("Missing product reports cannot be searched by name")
        return _similarity(search_filter) >= settings.similarity_threshold
    raise ValidationError(f"Unsupported search filter: {search_filter!r}")


def _sort_key(kind: EntityKind, field: SortingField, search_filter: SearchFilter):
    """
    Column to sort by, or None if the field carries no signal for this kind
    of result; then only the id tie-break applies.
    """
    if field == SortingField.REPORTED_DATE:
        if kind == EntityKind.REQUEST:
            return models.RequestedProduct.date
        if kind == EntityKind.MISSING:
            return models.MissingProductReport.date
        return None
    if field == SortingField.PRODUCT_NAME:
        if kind == EntityKind.MISSING:
            return None
        return models.ProductDescription.name
    if field == SortingField.PRODUCT_ID:
        return _product_id_column(kind)
    if field == SortingField.SIMILARITY:
        if isinstance(search_filter, TextSearch):
            return _similarity(search_filter)
        return None
    raise ValidationError(f"Unsupported sorting field: {field!r}")


def _default_sorting(kind: EntityKind, search_filter: SearchFilter) -> Optional[Sorting]:
    if isinstance(search_filter, TextSearch):
        return Sorting(field=SortingField.SIMILARITY, order=SortingOrder.DESC)
    if kind == EntityKind.MISSING:
        return Sorting(field=SortingField.REPORTED_DATE, order=SortingOrder.ASC)
    return None


def _base_query(db: Session, kind: EntityKind) -> Query:
    if kind == EntityKind.PRODUCT:
        return (
            db.query(models.Product)
            .join(models.Product.description)
            .options(
                contains_eager(models.Product.description).joinedload(
                    models.ProductDescription.nutrients
                )
            )
        )
    if kind == EntityKind.REQUEST:
        return (
            db.query(models.RequestedProduct)
            .join(models.RequestedProduct.description)
            .options(
                contains_eager(models.RequestedProduct.description).joinedload(
                    models.ProductDescription.nutrients
                )
            )
        )
    return db.query(models.MissingProductReport)


def _to_entry(kind: EntityKind, row, with_preview: bool):
    if kind == EntityKind.PRODUCT:
        description = row.description
        return description.id, description_from_row(description, with_preview)
    if kind == EntityKind.REQUEST:
        return row.id, ProductRequest(
            product_description=description_from_row(row.description, with_preview),
            date=as_utc(row.date),
        )
    return row.id, MissingProduct(product_id=row.product_id, date=as_utc(row.date))


def query(
    db: Session,
    kind: EntityKind,
    search_filter: Optional[SearchFilter] = None,
    sorting: Optional[Sorting] = None,
    offset: int = 0,
    limit: Optional[int] = None,
    with_preview: bool = False,
) -> List[Tuple[int, object]]:
    """
    List entries of the given kind as (internal id, entity) pairs.
    Full images are never part of list results.
    """
    check_page(offset, limit)
    search_filter = search_filter if search_filter is not None else NoFilter()

    q = _base_query(db, kind)

    clause = _filter_clause(kind, search_filter)
    if clause is not None:
        q = q.filter(clause)

    sorting = sorting or _default_sorting(kind, search_filter)
    order_by = []
    if sorting is not None:
        key = _sort_key(kind, sorting.field, search_filter)
        if key is not None:
            order_by.append(key.desc() if sorting.order == SortingOrder.DESC else key.asc())
    order_by.append(_id_column(kind).asc())

    rows = q.order_by(*order_by).offset(offset).limit(limit).all()

    logger.debug(
        f"[QUERY] {kind.value}: filter={search_filter!r}, sorting={sorting!r}, "
        f"offset={offset}, limit={limit} -> {len(rows)} row(s)"
    )
    return [_to_entry(kind, row, with_preview) for row in rows]


def query_products(
    db: Session, product_query: ProductQuery, with_preview: bool = False
) -> List[Tuple[int, ProductDescription]]:
    return query(
        db,
        EntityKind.PRODUCT,
        product_query.filter,
        product_query.sorting,
        product_query.offset,
        product_query.limit,
        with_preview,
    )


def query_requests(
    db: Session, product_query: ProductQuery, with_preview: bool = False
) -> List[Tuple[int, ProductRequest]]:
    return query(
        db,
        EntityKind.REQUEST,
        product_query.filter,
        product_query.sorting,
        product_query.offset,
        product_query.limit,
        with_preview,
    )


def query_missing(
    db: Session, missing_query: MissingProductQuery
) -> List[Tuple[int, MissingProduct]]:
    search_filter = (
        ExactId(external_id=missing_query.product_id)
        if missing_query.product_id
        else NoFilter()
    )
    return query(
        db,
        EntityKind.MISSING,
        search_filter,
        Sorting(field=SortingField.REPORTED_DATE, order=missing_query.order),
        missing_query.offset,
        missing_query.limit,
    )
