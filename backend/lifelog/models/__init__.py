"""ORM models package.

Importing this module ensures every model is registered with the
SQLAlchemy ``Base.metadata`` so that Alembic autogenerate can detect
all tables.
"""

from lifelog.models.activity import Activity
from lifelog.models.user import User

__all__ = [
    "Activity",
    "User",
]
