"""
Image access: optional image payloads in read results, and raw image
bytes for the dedicated image endpoints.

Image rows hang off the description through lazy relationships, so an
image that is not asked for is never loaded from the database.
"""
import enum
import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from productdb import models
from productdb.core.errors import NotFoundError, ValidationError
from productdb.schemas.product import ProductImage
from productdb.schemas.query import EntityKind

logger = logging.getLogger(__name__)


class ImageSlot(str, enum.Enum):
    PREVIEW = "preview"
    FULL = "full"


def image_row(image: Optional[ProductImage]) -> Optional[models.ProductImage]:
    """A fresh image row; rows are never shared between descriptions."""
    if image is None:
        return None
    return models.ProductImage(data=image.data, content_type=image.content_type)


def image_from_row(row: Optional[models.ProductImage]) -> Optional[ProductImage]:
    if row is None:
        return None
    return ProductImage(content_type=row.content_type, data=row.data)


def image_fields(
    description: models.ProductDescription,
    with_preview: bool,
    with_full_image: bool,
) -> Dict[str, Any]:
    """
    Image fields to put into a description read result.
    A slot that is not requested is left out entirely.
    """
    fields: Dict[str, Any] = {}
    if with_preview:
        fields["preview"] = image_from_row(description.preview)
    if with_full_image:
        fields["full_image"] = image_from_row(description.full_image)
    return fields


def _owner_description(
    db: Session, kind: EntityKind, owner_id: Union[str, int]
) -> Optional[models.ProductDescription]:
    if kind == EntityKind.PRODUCT:
        owner = (
            db.query(models.Product)
            .filter(models.Product.product_id == str(owner_id))
            .first()
        )
    elif kind == EntityKind.REQUEST:
        owner = (
            db.query(models.RequestedProduct)
            .filter(models.RequestedProduct.id == int(owner_id))
            .first()
        )
    else:
        raise ValidationError(f"{kind.value} entries have no images")

    return owner.description if owner is not None else None


def get_image(
    db: Session,
    kind: EntityKind,
    owner_id: Union[str, int],
    slot: ImageSlot = ImageSlot.FULL,
) -> ProductImage:
    """
    Raw image of a product (by external id) or a product request (by id).
    Raises NotFoundError if the owner or the image slot is empty.
    """
    logger.debug(f"[IMAGES] Get {slot.value} image of {kind.value} {owner_id}")

    description = _owner_description(db, kind, owner_id)
    if description is None:
        raise NotFoundError(f"No {kind.value} with id {owner_id}")

    row = description.preview if slot == ImageSlot.PREVIEW else description.full_image
    if row is None:
        logger.debug(f"[IMAGES] {kind.value} {owner_id} has no {slot.value} image")
        raise NotFoundError(f"The {kind.value} {owner_id} has no {slot.value} image")

    logger.debug(
        f"[IMAGES] Found {slot.value} image of {kind.value} {owner_id}: "
        f"size={len(row.data)}, content-type={row.content_type}"
    )
    return image_from_row(row)
