"""
Entity store: creation, lookup and deletion of products and product requests.

Every public create/delete runs as one transaction. On any failure the
session is rolled back and the error is re-raised, so a half written
description (e.g. nutrients without a description) is never committed.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from productdb import models
from productdb.core.errors import (
    ConflictError,
    NotFoundError,
    ProductDBError,
    ValidationError,
)
from productdb.models.product_description import QuantityType
from productdb.schemas.product import (
    Nutrients,
    ProductDescription,
    ProductImage,
    ProductInfo,
    Weight,
)
from productdb.schemas.request import ProductRequest
from productdb.services import cascade
from productdb.services.description_mapper import as_utc, description_from_row

logger = logging.getLogger(__name__)


def _check_finite(name: str, value: Optional[float]) -> None:
    if value is not None and not math.isfinite(value):
        raise ValidationError(f"The {name} must be a finite number, got {value}")


def validate_description(info: ProductInfo, nutrients: Optional[Nutrients]) -> None:
    """Raise ValidationError if the description breaks a schema invariant."""
    _check_finite("portion", info.portion)
    _check_finite("volume weight ratio", info.volume_weight_ratio)
    if info.portion is None or info.portion <= 0:
        raise ValidationError(f"The portion must be positive, got {info.portion}")

    has_ratio = info.volume_weight_ratio is not None
    if info.quantity_type == QuantityType.VOLUME and not has_ratio:
        raise ValidationError("A volume weight ratio is required for quantity type 'volume'")
    if info.quantity_type == QuantityType.WEIGHT and has_ratio:
        raise ValidationError("A volume weight ratio is only allowed for quantity type 'volume'")

    if nutrients is None or nutrients.kcal is None:
        raise ValidationError("The nutrients must contain kcal")

    _check_finite("kcal", nutrients.kcal)
    for field, weight in nutrients:
        if isinstance(weight, Weight):
            _check_finite(field, weight.value)


def create_description(
    db: Session,
    info: ProductInfo,
    nutrients: Nutrients,
    preview: Optional[ProductImage] = None,
    full_image: Optional[ProductImage] = None,
) -> models.ProductDescription:
    """
    Insert nutrients, images and the description referencing them.
    Flushes but does not commit; the caller owns the transaction.
    """
    validate_description(info, nutrients)

    logger.debug(f"[STORE] Create product description: id={info.id}, name={info.name}")
    description = cascade.build_description(info, nutrients, preview, full_image)
    db.add(description)
    db.flush()

    logger.debug(
        f"[STORE] Create product description: id={info.id}, name={info.name}, "
        f"db_id={description.id} DONE"
    )
    return description


def _product_exists(db: Session, external_id: str) -> bool:
    return (
        db.query(models.Product.product_id)
        .filter(models.Product.product_id == external_id)
        .first()
        is not None
    )


def create_product(db: Session, description: ProductDescription) -> str:
    """
    Publish a new product under the external id of its description.
    Raises ConflictError if a product with that id already exists.
    """
    external_id = description.info.id
    logger.info(f"[STORE] New product with id: {external_id}")

    try:
        if _product_exists(db, external_id):
            logger.info(f"[STORE] Product with id {external_id} already exists in the database")
            raise ConflictError(f"Product with id {external_id} already exists")

        desc_row = create_description(
            db,
            description.info,
            description.nutrients,
            description.preview,
            description.full_image,
        )
        db.add(models.Product(product_id=external_id, description=desc_row))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # lost a race against a concurrent insert of the same id
        if _product_exists(db, external_id):
            logger.info(f"[STORE] Product with id {external_id} already exists in the database")
            raise ConflictError(f"Product with id {external_id} already exists") from e
        logger.error(f"[STORE] Failed to add product with id {external_id}: {e}", exc_info=True)
        raise
    except ProductDBError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"[STORE] Failed to add product with id {external_id}: {e}", exc_info=True)
        raise

    logger.info(f"[STORE] New product {external_id} added")
    return external_id


def create_request(
    db: Session,
    description: ProductDescription,
    date: Optional[datetime] = None,
) -> Tuple[int, datetime]:
    """Store a product proposal; returns its id and submission date."""
    date = as_utc(date or datetime.now(timezone.utc))
    logger.info(f"[STORE] Request new product with name: {description.info.name}")

    try:
        desc_row = create_description(
            db,
            description.info,
            description.nutrients,
            description.preview,
            description.full_image,
        )
        request = models.RequestedProduct(description=desc_row, date=date)
        db.add(request)
        db.flush()
        request_id = request.id
        db.commit()
    except ProductDBError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"[STORE] Failed to request new product: {e}", exc_info=True)
        raise

    logger.info(f"[STORE] Requested new product with name: {description.info.name} as {request_id}")
    return request_id, date


def delete_product(db: Session, external_id: str) -> None:
    logger.info(f"[STORE] Delete product with id: {external_id}")

    product = (
        db.query(models.Product)
        .filter(models.Product.product_id == external_id)
        .with_for_update()
        .first()
    )
    if product is None:
        raise NotFoundError(f"No product with id {external_id}")

    try:
        cascade.delete_owner(db, product)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise NotFoundError(f"No product with id {external_id}") from e
    except Exception as e:
        db.rollback()
        logger.error(f"[STORE] Failed to delete product {external_id}: {e}", exc_info=True)
        raise

    logger.info(f"[STORE] Deleted product with id: {external_id}")


def delete_request(db: Session, request_id: int) -> None:
    logger.info(f"[STORE] Delete requested product with id: {request_id}")

    request = (
        db.query(models.RequestedProduct)
        .filter(models.RequestedProduct.id == request_id)
        .with_for_update()
        .first()
    )
    if request is None:
        raise NotFoundError(f"No product request with id {request_id}")

    try:
        cascade.delete_owner(db, request)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise NotFoundError(f"No product request with id {request_id}") from e
    except Exception as e:
        db.rollback()
        logger.error(f"[STORE] Failed to delete requested product {request_id}: {e}", exc_info=True)
        raise

    logger.info(f"[STORE] Deleted requested product with id: {request_id}")


def get_product(
    db: Session,
    external_id: str,
    with_preview: bool = False,
    with_full_image: bool = False,
) -> Optional[ProductDescription]:
    logger.debug(
        f"[STORE] Get product with id: {external_id} "
        f"[preview={with_preview}, full_image={with_full_image}]"
    )

    product = db.query(models.Product).filter(models.Product.product_id == external_id).first()
    if product is None:
        logger.debug(f"[STORE] No product with id: {external_id}")
        return None

    return description_from_row(product.description, with_preview, with_full_image)


def get_request(
    db: Session,
    request_id: int,
    with_preview: bool = False,
    with_full_image: bool = False,
) -> Optional[ProductRequest]:
    logger.debug(
        f"[STORE] Get product request with id: {request_id} "
        f"[preview={with_preview}, full_image={with_full_image}]"
    )

    request = (
        db.query(models.RequestedProduct)
        .filter(models.RequestedProduct.id == request_id)
        .first()
    )
    if request is None:
        logger.debug(f"[STORE] No product request with id: {request_id}")
        return None

    return ProductRequest(
        product_description=description_from_row(
            request.description, with_preview, with_full_image
        ),
        date=as_utc(request.date),
    )
