"""
Ownership of nutrients and images.

A description owns its nutrients and images exclusively, and a product or a
product request owns its description exclusively. New descriptions always
get fresh sub-entity rows, and deleting an owner removes the whole chain.
Everything here runs inside the caller's transaction; nothing commits.
"""
import logging
from typing import Optional, Union

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import ObjectDeletedError

from productdb import models
from productdb.core.errors import NotFoundError
from productdb.schemas.product import Nutrients, ProductImage, ProductInfo
from productdb.services.description_mapper import nutrients_row
from productdb.services.images import image_row

logger = logging.getLogger(__name__)

Owner = Union[models.Product, models.RequestedProduct]


def build_description(
    info: ProductInfo,
    nutrients: Nutrients,
    preview: Optional[ProductImage] = None,
    full_image: Optional[ProductImage] = None,
) -> models.ProductDescription:
    """A description row together with freshly created sub-entity rows."""
    return models.ProductDescription(
        product_id=info.id,
        name=info.name,
        producer=info.producer,
        quantity_type=info.quantity_type,
        portion=info.portion,
        volume_weight_ratio=info.volume_weight_ratio,
        nutrients=nutrients_row(nutrients),
        preview=image_row(preview),
        full_image=image_row(full_image),
    )


def delete_description(db: Session, description: models.ProductDescription) -> None:
    """Delete a description, its nutrients and both images."""
    nutrients = description.nutrients
    owned_images = [
        image for image in (description.preview, description.full_image) if image is not None
    ]

    # the description holds the foreign keys, so it has to go first
    db.delete(description)
    db.flush()

    db.delete(nutrients)
    for image in owned_images:
        db.delete(image)
    db.flush()

    logger.debug(
        f"[CASCADE] Deleted description {description.id} with nutrients "
        f"{nutrients.id} and {len(owned_images)} image(s)"
    )


def delete_owner(db: Session, owner: Owner) -> None:
    """
    Delete a product or product request and everything it owns.
    Raises NotFoundError if a concurrent delete already removed the description.
    """
    try:
        description = owner.description
    except ObjectDeletedError:
        description = None
    if description is None:
        logger.info(f"[CASCADE] Description of {type(owner).__name__} is already gone")
        raise NotFoundError("The entry was deleted concurrently")

    db.delete(owner)
    db.flush()

    delete_description(db, description)
