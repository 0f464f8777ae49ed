"""
Test helpers package for API testing.
"""

from .database_helpers import (
    DatabaseHelpers,
    verify_ad_in_db,
    count_ads_in_db,
    count_leads_in_db
)

__all__ = [
    "DatabaseHelpers",
    "verify_ad_in_db",
    "count_ads_in_db",
    "count_leads_in_db"
]
