import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from productdb.db.base import Base


class QuantityType(str, enum.Enum):
    # portion in grams
    WEIGHT = "weight"
    # portion in millilitres
    VOLUME = "volume"


class ProductDescription(Base):
    """
    The full identifying and nutritional record of a product.
    Owned by exactly one Product or RequestedProduct, and in turn the sole
    owner of its nutrients and images (hence the unique foreign keys).
    """

    __tablename__ = "product_description"
    __table_args__ = (
        CheckConstraint("portion > 0", name="ck_product_description_portion_positive"),
        CheckConstraint(
            "(quantity_type = 'volume' AND volume_weight_ratio IS NOT NULL)"
            " OR (quantity_type = 'weight' AND volume_weight_ratio IS NULL)",
            name="ck_product_description_volume_weight_ratio",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(String(64), nullable=False, index=True)
    name = Column(String(64), nullable=False, index=True)
    producer = Column(String(64), nullable=True)

    quantity_type = Column(
        Enum(
            QuantityType,
            name="quantitytype",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    portion = Column(Float, nullable=False)
    # volume(ml) = weight(g) * volume_weight_ratio
    volume_weight_ratio = Column(Float, nullable=True)

    preview_id = Column(Integer, ForeignKey("product_image.id"), nullable=True, unique=True)
    full_image_id = Column(Integer, ForeignKey("product_image.id"), nullable=True, unique=True)
    nutrients_id = Column(Integer, ForeignKey("nutrients.id"), nullable=False, unique=True)

    preview = relationship("ProductImage", foreign_keys=[preview_id])
    full_image = relationship("ProductImage", foreign_keys=[full_image_id])
    nutrients = relationship("Nutrients")
