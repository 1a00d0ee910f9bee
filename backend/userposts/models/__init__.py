"""ORM Models: SQLAlchemy declarative table mappings for users, addresses and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; addresses and posts are scoped by user_id
    - These classes never leave repositories/: services see core.entities only

Design Decisions:
    - One file per table for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from userposts.models.user import User  # noqa: F401
from userposts.models.address import Address  # noqa: F401
from userposts.models.post import Post  # noqa: F401
