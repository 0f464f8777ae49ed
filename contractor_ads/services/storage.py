from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from contractor_ads.core.database import Base, build_engine, build_session_factory
from contractor_ads.core.exceptions import StorageError, ValidationError, AD_ERRORS
from contractor_ads.core.logger import get_logger
from contractor_ads.models.ad import Ad, utcnow
from contractor_ads.models.lead import Lead

logger = get_logger(__name__)

# SQLite INTEGER is a signed 64-bit value; larger ids can never have been assigned
MAX_ROW_ID = 2**63 - 1


def _is_storable_id(value: int) -> bool:
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


class Storage:
    """Relational storage for ads and leads.

    Every public method runs in its own session and commits before returning,
    so an acknowledged write is durable. SQLAlchemy failures are rolled back
    and re-raised as ``StorageError``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "Storage":
        return cls(build_engine(database_url))

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        session = self.SessionLocal()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error {action}: {str(e)}", exc_info=True)
            raise StorageError(f"Error {action}: {str(e)}") from e
        finally:
            session.close()

    def create_schema(self) -> None:
        """Create the ``ads`` and ``leads`` tables if they do not exist."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Error creating schema: {str(e)}", exc_info=True)
            raise StorageError(f"Error creating schema: {str(e)}") from e
        logger.info("Database schema ready", extra={"component": "storage"})

    def ping(self) -> None:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError(f"Database unreachable: {str(e)}") from e

    def dispose(self) -> None:
        self.engine.dispose()

    # -- ads -----------------------------------------------------------------

    def insert_ad(self, fields: Dict[str, Any]) -> int:
        """Insert an ad and return its id. Omitted columns take schema defaults."""
        columns = dict(fields)
        if "metadata" in columns:
            columns["metadata_"] = columns.pop("metadata")
        now = utcnow()
        columns.setdefault("created_at", now)
        columns.setdefault("updated_at", now)
        with self._session("creating ad") as session:
            ad = Ad(**columns)
            session.add(ad)
            session.commit()
            return ad.id

    def get_ad_by_id(self, ad_id: int) -> Optional[Ad]:
        if not _is_storable_id(ad_id):
            return None
        with self._session("fetching ad") as session:
            return session.get(Ad, ad_id)

    def get_ad_by_campaign_id(self, campaign_id: str) -> Optional[Ad]:
        """Return the newest ad for *campaign_id* (ties broken by highest id)."""
        with self._session("fetching ad by campaign") as session:
            return (
                session.query(Ad)
                .filter(Ad.campaign_id == campaign_id)
                .order_by(Ad.created_at.desc(), Ad.id.desc())
                .first()
            )

    def update_ad(self, ad_id: int, partial_fields: Dict[str, Any]) -> bool:
        """Overwrite the allow-listed fields of an ad.

        Returns False when the ad does not exist. Raises ValidationError when
        none of *partial_fields* is updatable.
        """
        updates = {k: v for k, v in partial_fields.items() if k in Ad.UPDATABLE_FIELDS}
        if not updates:
            raise ValidationError(AD_ERRORS['NO_VALID_FIELDS'])

        if not _is_storable_id(ad_id):
            return False

        with self._session("updating ad") as session:
            ad = session.get(Ad, ad_id)
            if ad is None:
                return False
            for key, value in updates.items():
                setattr(ad, key, value)
            ad.updated_at = utcnow()
            session.commit()
            return True

    def list_ads(self) -> List[Ad]:
        with self._session("fetching ads") as session:
            return session.query(Ad).order_by(Ad.created_at.desc(), Ad.id.desc()).all()

    # -- leads ---------------------------------------------------------------

    def insert_lead_ignore_duplicate(self, fields: Dict[str, Any]) -> bool:
        """Insert a lead unless its ``lead_id`` is already stored.

        Returns True if a row was written, False if it was a duplicate.
        """
        lead_id = fields.get("lead_id")
        with self._session("creating lead") as session:
            if lead_id is not None and self._lead_exists(session, lead_id):
                return False
            session.add(Lead(**fields))
            try:
                session.commit()
            except IntegrityError:
                # Lost a race with a concurrent insert of the same lead_id
                session.rollback()
                if lead_id is not None and self._lead_exists(session, lead_id):
                    return False
                raise
            return True

    def _lead_exists(self, session: Session, lead_id: str) -> bool:
        return session.query(Lead.id).filter(Lead.lead_id == lead_id).first() is not None

    def list_leads(self) -> List[Lead]:
        with self._session("fetching leads") as session:
            return session.query(Lead).order_by(Lead.logged_at.desc(), Lead.id.desc()).all()
