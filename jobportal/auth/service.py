"""
JobPortal - Authentication Service

Mock authentication backend: login against stored accounts and registration
with consent checks. Each call waits for a fixed artificial delay before it
resolves, standing in for a network round trip. There is no retry; a failed
call must be started again by the user.

Features:
- PBKDF2 password hashing (passlib)
- Seeded demo account
- Registration validation (presence, email format, password rules, consents)
"""
import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ..config import settings
from .models import Account

logger = logging.getLogger("jobportal.auth")

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class AuthServiceError(Exception):
    """Custom exception for authentication errors."""
    pass


class InvalidCredentialsError(AuthServiceError):
    """Email/password pair did not match an account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class RegistrationError(AuthServiceError):
    """Registration payload was incomplete or rejected."""
    pass


class AuthService:
    """
    Authentication service for the mock backend.

    Provides:
    - Password hashing and verification
    - Delayed login and registration calls
    - Demo account seeding
    """

    def __init__(self):
        """Initialize auth service with password context."""
        self._pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    # -------------------------------------------------------------------------
    # Password Hashing
    # -------------------------------------------------------------------------

    def hash_password(self, password: str) -> str:
        """Hash a password."""
        return self._pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Returns:
            True if password matches, False otherwise (including unreadable hashes)
        """
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error("Password verification failed: %s", e)
            return False

    def check_password_strength(self, password: str) -> Dict[str, Any]:
        """
        Check password length rules and return feedback.

        Returns:
            Dict with 'valid' bool and 'errors' list
        """
        errors = []

        if len(password) < 8:
            errors.append("Password must be at least 8 characters")
        if len(password) > 128:
            errors.append("Password must be less than 128 characters")

        return {
            "valid": len(errors) == 0,
            "errors": errors
        }

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def get_account_by_email(self, email: str, db: Session) -> Optional[Account]:
        return db.query(Account).filter(Account.email == email.strip().lower()).first()

    def seed_demo_account(self, db: Session) -> Account:
        """Create the demo account if it does not exist yet."""
        demo = settings.mock
        account = self.get_account_by_email(demo.demo_email, db)
        if account:
            return account

        account = Account(
            email=demo.demo_email.lower(),
            hashed_password=self.hash_password(demo.demo_password),
            name=demo.demo_name,
            terms_consent=True,
            privacy_consent=True,
        )
        db.add(account)
        db.commit()
        db.refresh(account)
        logger.info("Seeded demo account %s", account.email)
        return account

    def authenticate(self, email: str, password: str, db: Session) -> Account:
        """
        Check credentials synchronously.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        account = self.get_account_by_email(email or "", db)

        if not account:
            logger.debug("Account not found: %s", email)
            raise InvalidCredentialsError()

        if not self.verify_password(password or "", account.hashed_password):
            logger.debug("Invalid password for account: %s", email)
            raise InvalidCredentialsError()

        logger.info("Account authenticated: %s (%s)", account.id, account.email)
        return account

    async def login(self, email: str, password: str, db: Session) -> Account:
        """Delayed login call. Resolves with the account or raises InvalidCredentialsError."""
        await asyncio.sleep(settings.mock.login_delay_seconds)
        return await asyncio.to_thread(self.authenticate, email, password, db)

    def validate_registration(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        terms_consent: bool,
        privacy_consent: bool,
    ) -> List[str]:
        """Return every problem with a registration payload, in form order."""
        errors = []

        if not (name and name.strip()) or not (email and email.strip()) or not password:
            errors.append("Registration failed. Please check your information.")
            return errors

        if not EMAIL_PATTERN.match(email.strip()):
            errors.append("Invalid email format")

        strength = self.check_password_strength(password)
        errors.extend(strength["errors"])

        # Confirmation is only compared once the user has typed one
        if confirm_password and confirm_password != password:
            errors.append("Passwords do not match")

        if not terms_consent or not privacy_consent:
            errors.append("You must agree to Terms & Conditions and Privacy Policy")

        return errors

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        db: Session,
        confirm_password: Optional[str] = None,
        terms_consent: bool = False,
        privacy_consent: bool = False,
        marketing_consent: bool = False,
    ) -> Account:
        """
        Delayed registration call.

        Raises:
            RegistrationError: If the payload is incomplete or the email is taken
        """
        await asyncio.sleep(settings.mock.register_delay_seconds)
        return await asyncio.to_thread(
            self.create_account,
            name, email, password, db,
            confirm_password, terms_consent, privacy_consent, marketing_consent
        )

    def create_account(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        db: Session,
        confirm_password: Optional[str] = None,
        terms_consent: bool = False,
        privacy_consent: bool = False,
        marketing_consent: bool = False,
    ) -> Account:
        """
        Validate a registration payload and store the account.

        Raises:
            RegistrationError: If the payload is incomplete or the email is taken
        """
        errors = self.validate_registration(
            name, email, password, confirm_password, terms_consent, privacy_consent
        )
        if errors:
            raise RegistrationError(errors[0])

        if self.get_account_by_email(email, db):
            raise RegistrationError("User with this email already exists")

        account = Account(
            email=email.strip().lower(),
            hashed_password=self.hash_password(password),
            name=name.strip(),
            terms_consent=terms_consent,
            privacy_consent=privacy_consent,
            marketing_consent=marketing_consent,
        )
        db.add(account)
        db.commit()
        db.refresh(account)

        logger.info("Registered new account: %s (%s)", account.id, account.email)
        return account


# Global service instance
auth_service = AuthService()
