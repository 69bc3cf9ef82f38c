from productdb.db.base import Base

# Model imports so that Alembic and metadata.create_all see every table
from productdb.models.nutrients import Nutrients  # noqa
from productdb.models.product_image import ProductImage  # noqa
from productdb.models.product_description import ProductDescription, QuantityType  # noqa
from productdb.models.product import Product  # noqa
from productdb.models.requested_product import RequestedProduct  # noqa
from productdb.models.missing_product import MissingProductReport  # noqa
