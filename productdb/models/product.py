from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from productdb.db.base import Base


class Product(Base):
    __tablename__ = "products"

    # the external id (EAN, GTIN, ...) is the primary key
    product_id = Column(String(64), primary_key=True)
    product_description_id = Column(
        Integer, ForeignKey("product_description.id"), nullable=False, unique=True
    )

    description = relationship("ProductDescription")
