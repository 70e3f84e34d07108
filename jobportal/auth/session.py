"""
JobPortal - Session lifecycle.

The session manager owns the token, user and session records of one client
scope. It issues tokens, checks validity (tearing the session down when the
token has expired), refreshes the activity timestamp, and terminates sessions.

Components that need to know who is logged in receive a `SessionContext`
built by `SessionManager.current()` rather than reading storage themselves.
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from ..storage import RecordStore, AUTH_TOKEN_KEY, USER_KEY, SESSION_KEY, SESSION_KEYS
from .schemas import SessionRecord, UserRecord
from .tokens import AuthResult, Authenticated, Clock, TokenClaims, decode_token, issue_token

logger = logging.getLogger("jobportal.auth")


def _to_datetime(epoch_seconds: float) -> datetime:
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)


@dataclass(frozen=True)
class SessionContext:
    """Identity and expiry of the current session, passed to every consumer."""
    client_id: str
    claims: TokenClaims
    user: UserRecord
    session: Optional[SessionRecord]

    @property
    def user_id(self) -> int:
        return self.claims.user_id

    @property
    def expires_at(self) -> datetime:
        return _to_datetime(self.claims.expires_at)


class SessionManager:
    """
    Session lifecycle for one client scope.

    Args:
        store: Record store of the client
        now: Clock returning epoch seconds
        on_terminate: Called with the client id after the session is torn down
    """

    def __init__(
        self,
        store: RecordStore,
        now: Clock = time.time,
        on_terminate: Optional[Callable[[str], None]] = None
    ):
        self.store = store
        self.now = now
        self.on_terminate = on_terminate

    @property
    def client_id(self) -> str:
        return self.store.client_id

    # -------------------------------------------------------------------------
    # Issuance
    # -------------------------------------------------------------------------

    def issue(self, user_id: int, email: str, remember_me: bool = False):
        """Issue a token. Returns (token_string, claims); nothing is stored."""
        return issue_token(user_id, email, remember_me=remember_me, now=self.now)

    def establish(self, user_id: int, email: str, name: Optional[str], remember_me: bool = False) -> SessionContext:
        """Issue a token and write the token, user and session records."""
        token, claims = self.issue(user_id, email, remember_me)
        login_time = _to_datetime(self.now())

        user = UserRecord(id=user_id, name=name, email=email, login_time=login_time)
        session = SessionRecord(
            login_time=login_time,
            last_activity=login_time,
            expires_at=_to_datetime(claims.expires_at)
        )

        self.store.put(USER_KEY, user.model_dump(mode="json"))
        self.store.put(AUTH_TOKEN_KEY, token)
        self.store.put(SESSION_KEY, session.model_dump(mode="json"))

        logger.info(
            "Session established for user %s (client %s), expires %s",
            user_id, self.client_id, session.expires_at.isoformat()
        )
        return SessionContext(client_id=self.client_id, claims=claims, user=user, session=session)

    # -------------------------------------------------------------------------
    # Validity
    # -------------------------------------------------------------------------

    def check(self, token: Optional[str]) -> AuthResult:
        """
        Verify a token. An expired token tears the session down.

        Malformed tokens are reported as unauthenticated without teardown.
        """
        result = decode_token(token, now=self.now)
        if not isinstance(result, Authenticated) and result.expired:
            logger.info("Session expired for client %s", self.client_id)
            self.terminate()
        return result

    def is_valid(self, token: Optional[str]) -> bool:
        return isinstance(self.check(token), Authenticated)

    def stored_token(self) -> Optional[str]:
        token = self.store.get(AUTH_TOKEN_KEY)
        return token if isinstance(token, str) else None

    def is_authenticated(self) -> bool:
        """Check the token stored for this client."""
        return self.is_valid(self.stored_token())

    def current(self) -> Optional[SessionContext]:
        """Build the session context, or None when there is no valid session."""
        result = self.check(self.stored_token())
        if not isinstance(result, Authenticated):
            return None

        raw_user = self.store.get(USER_KEY)
        try:
            user = UserRecord.model_validate(raw_user) if raw_user else None
        except ValueError:
            user = None
        if user is None:
            user = UserRecord(id=result.claims.user_id, email=result.claims.email)

        raw_session = self.store.get(SESSION_KEY)
        try:
            session = SessionRecord.model_validate(raw_session) if raw_session else None
        except ValueError:
            session = None

        return SessionContext(client_id=self.client_id, claims=result.claims, user=user, session=session)

    # -------------------------------------------------------------------------
    # Activity & teardown
    # -------------------------------------------------------------------------

    def refresh_activity(self) -> Optional[SessionRecord]:
        """
        Set lastActivity to now when a valid session exists.

        Returns the updated session record, or None when nothing was refreshed.
        """
        if not self.is_authenticated():
            return None

        raw_session = self.store.get(SESSION_KEY)
        if not raw_session:
            return None

        try:
            session = SessionRecord.model_validate(raw_session)
        except ValueError:
            logger.warning("Unreadable session record for client %s", self.client_id)
            return None

        session.last_activity = _to_datetime(self.now())
        self.store.put(SESSION_KEY, session.model_dump(mode="json"))
        logger.debug("Refreshed activity for client %s", self.client_id)
        return session

    def terminate(self) -> None:
        """Clear every session-derived record. Safe to call repeatedly."""
        removed = self.store.delete(*SESSION_KEYS)
        if removed:
            logger.info("Session terminated for client %s", self.client_id)
        if self.on_terminate:
            self.on_terminate(self.client_id)
