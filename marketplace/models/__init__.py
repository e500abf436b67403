"""ORM Models - SQLAlchemy declarative models for all marketplace entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every model is imported here so Base.metadata is complete before create_all or autogenerate
"""

from marketplace.models.user import User  # noqa: F401
from marketplace.models.category import Category  # noqa: F401
from marketplace.models.item import Item  # noqa: F401
from marketplace.models.favorite import FavoriteFolder, FavoriteItem  # noqa: F401
from marketplace.models.sale import Sale  # noqa: F401
