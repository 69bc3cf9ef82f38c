from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from productdb.db.base import Base


class RequestedProduct(Base):
    __tablename__ = "requested_products"

    id = Column(Integer, primary_key=True, index=True)
    product_description_id = Column(
        Integer, ForeignKey("product_description.id"), nullable=False, unique=True
    )
    date = Column(DateTime(timezone=True), nullable=False)

    description = relationship("ProductDescription")
