"""
Database verification helpers for API testing.

These helpers read the database directly so tests can check that an API call
had (or did not have) the expected effect on stored rows.
"""

from typing import Dict, Any, List

from sqlalchemy.orm import Session

from contractor_ads.models.ad import Ad
from contractor_ads.models.lead import Lead


class DatabaseHelpers:
    """Database verification helpers for testing."""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def verify_ad_in_db(self, ad_id: int, expected_data: Dict[str, Any] = None) -> Ad:
        """
        Verify ad exists in database with expected values.

        Raises:
            AssertionError: If ad not found or values don't match
        """
        self.db_session.expire_all()
        ad = self.db_session.get(Ad, ad_id)
        assert ad is not None, f"Ad {ad_id} not found in database"

        if expected_data:
            for field, expected_value in expected_data.items():
                attr = "metadata_" if field == "metadata" else field
                actual_value = getattr(ad, attr, None)
                assert actual_value == expected_value, (
                    f"Ad {ad_id}: Expected {field}={expected_value}, got {actual_value}"
                )
        return ad

    def count_ads_in_db(self) -> int:
        return self.db_session.query(Ad).count()

    def count_leads_in_db(self) -> int:
        return self.db_session.query(Lead).count()

    def get_leads_by_lead_id(self, lead_id: str) -> List[Lead]:
        return self.db_session.query(Lead).filter(Lead.lead_id == lead_id).all()


def verify_ad_in_db(db_session: Session, ad_id: int, expected_data: Dict[str, Any] = None) -> Ad:
    return DatabaseHelpers(db_session).verify_ad_in_db(ad_id, expected_data)


def count_ads_in_db(db_session: Session) -> int:
    return DatabaseHelpers(db_session).count_ads_in_db()


def count_leads_in_db(db_session: Session) -> int:
    return DatabaseHelpers(db_session).count_leads_in_db()
