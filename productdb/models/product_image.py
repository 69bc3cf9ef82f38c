from sqlalchemy import Column, Integer, LargeBinary, String

from productdb.db.base import Base


class ProductImage(Base):
    __tablename__ = "product_image"

    id = Column(Integer, primary_key=True, index=True)
    data = Column(LargeBinary, nullable=False)
    content_type = Column(String(32), nullable=False)
