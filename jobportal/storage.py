"""
JobPortal - Per-client record store.

A small key/value store scoped to one client (browser profile). Every value is
a JSON document stored with the schema version it was written under, so a
later release can upgrade or refuse records it does not understand.

Usage:
    store = RecordStore(db, client_id)
    store.put(PROFILE_KEY, {"first_name": "Ada"})
    profile = store.get(PROFILE_KEY, {})
"""
import json
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from .database import with_retry
from .models import ClientRecord

logger = logging.getLogger("jobportal.storage")

# Fixed record identifiers
AUTH_TOKEN_KEY = "authToken"
USER_KEY = "userData"
SESSION_KEY = "sessionData"
PROFILE_KEY = "profileData"
RESUME_KEY = "resumeData"

SESSION_KEYS = (AUTH_TOKEN_KEY, USER_KEY, SESSION_KEY)

CURRENT_SCHEMA_VERSION = 1

# (key, from_version) -> function returning the record at from_version + 1
RECORD_UPGRADES: Dict[Tuple[str, int], Callable[[Any], Any]] = {}


class RecordStore:
    """JSON records for a single client scope."""

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def _row(self, key: str) -> Optional[ClientRecord]:
        return self.db.query(ClientRecord).filter(
            ClientRecord.client_id == self.client_id,
            ClientRecord.key == key
        ).first()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a record.

        Returns `default` when the record is absent, undecodable, or written
        by a schema version this release cannot read.
        """
        row = self._row(key)
        if row is None:
            return default

        try:
            value = json.loads(row.payload)
        except (TypeError, ValueError):
            logger.warning("Undecodable %s record for client %s", key, self.client_id)
            return default

        version = row.schema_version or 1
        if version > CURRENT_SCHEMA_VERSION:
            logger.warning(
                "Ignoring %s record for client %s: schema version %d is newer than %d",
                key, self.client_id, version, CURRENT_SCHEMA_VERSION
            )
            return default

        while version < CURRENT_SCHEMA_VERSION:
            upgrade = RECORD_UPGRADES.get((key, version))
            if upgrade is None:
                logger.warning(
                    "No upgrade path for %s record v%d (client %s)",
                    key, version, self.client_id
                )
                return default
            value = upgrade(value)
            version += 1

        return value

    @with_retry
    def put(self, key: str, value: Any) -> None:
        """Write a record, replacing any previous value."""
        try:
            row = self._row(key)
            payload = json.dumps(value)
            if row is None:
                row = ClientRecord(
                    client_id=self.client_id,
                    key=key,
                    schema_version=CURRENT_SCHEMA_VERSION,
                    payload=payload
                )
                self.db.add(row)
            else:
                row.payload = payload
                row.schema_version = CURRENT_SCHEMA_VERSION
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    @with_retry
    def delete(self, *keys: str) -> int:
        """Remove records. Missing keys are ignored. Returns the number removed."""
        try:
            count = self.db.query(ClientRecord).filter(
                ClientRecord.client_id == self.client_id,
                ClientRecord.key.in_(keys)
            ).delete(synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return count

    def exists(self, key: str) -> bool:
        return self._row(key) is not None
