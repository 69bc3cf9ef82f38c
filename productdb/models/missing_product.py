from sqlalchemy import Column, Integer, String, DateTime

from productdb.db.base import Base


class MissingProductReport(Base):
    __tablename__ = "reported_missing_products"

    id = Column(Integer, primary_key=True, index=True)
    # not a foreign key, the product usually does not exist yet
    product_id = Column(String(64), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False)
