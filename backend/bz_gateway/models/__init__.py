"""ORM Models — SQLAlchemy declarative models for the gateway's own tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata (bootstrap_schema relies on it)

Design Decisions:
    - One file per table for locality
"""

from bz_gateway.models.website_user import WebsiteUser  # noqa: F401
from bz_gateway.models.footer_icon import FooterIcon  # noqa: F401
from bz_gateway.models.event_tracking import EventTracking  # noqa: F401
from bz_gateway.models.website_traffic import WebsiteTraffic  # noqa: F401
