"""
Credential & Token Service

Authenticates users by password or by phone OTP and issues signed,
stateless session tokens carrying the user's identity and role.

Token claims:
    sub: user id (string)
    role, name, phone, email
    iat / exp: issue time and expiry (24h by default)

OTP challenges are single use and time boxed. Expiry is checked when a
code is presented; an expired challenge is purged at that moment.

Version: 1.0.0
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from tiffin.core.config import Settings, get_settings
from tiffin.core.errors import (
    AccessTokenRequired,
    AccountInactive,
    InvalidCredentials,
    InvalidToken,
    OtpExpired,
    OtpMismatch,
    OtpNotFound,
)
from tiffin.core.security import create_token, decode_token, hash_password, verify_password
from tiffin.models import OtpChallenge, Role, Session, User
from tiffin.services.notifications.base import BaseNotificationService
from tiffin.store import DataStore

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """
    Outcome of a successful authentication.

    Attributes:
        user: The authenticated (or newly created) account
        token: Signed session token for the Authorization header
        session: Claims carried by the token
        is_new_user: True when OTP verification created the account
    """
    user: User
    token: str
    session: Session
    is_new_user: bool = False


class CredentialService:
    """
    Password/OTP authentication and session-token handling.

    Example:
        >>> service = CredentialService(store, sms)
        >>> result = service.authenticate_by_password("user@test.com", "password")
        >>> session = service.resolve_token(result.token)
    """

    def __init__(
        self,
        store: DataStore,
        sms: Optional[BaseNotificationService] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.sms = sms
        self.settings = settings or get_settings()

    # =========================================================================
    # PASSWORD AUTHENTICATION
    # =========================================================================

    def _find_by_identifier(self, identifier: str) -> Optional[User]:
        return self.store.users.find_by_email(identifier) or self.store.users.find_by_phone(identifier)

    def authenticate_by_password(
        self,
        identifier: str,
        password: str,
        role: Optional[Role] = None,
    ) -> AuthResult:
        """
        Verify a password login.

        Args:
            identifier: Email address (or phone number) of the account
            password: Plain-text password
            role: Only accept accounts holding this role

        Raises:
            InvalidCredentials: Unknown account, wrong role or wrong password
            AccountInactive: The account was deactivated by an admin
        """
        user = self._find_by_identifier(identifier)

        if user is None or (role is not None and user.role != role):
            logger.warning(f"Login rejected for {identifier}: unknown account")
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login rejected for {identifier}: bad password")
            raise InvalidCredentials()

        if not user.is_active:
            logger.warning(f"Login rejected for {identifier}: account deactivated")
            raise AccountInactive()

        logger.info(f"✅ Login successful for {user.name} ({user.role.value})")
        return self._result_for(user)

    def signup(self, name: str, email: str, phone: str, password: str) -> AuthResult:
        """
        Register a new customer account.

        Raises:
            UserAlreadyExists: The email or phone is already registered
        """
        user = self.store.users.add(
            name=name,
            phone=phone,
            email=email,
            password_hash=hash_password(password),
            role=Role.CUSTOMER,
        )
        logger.info(f"📝 Signup successful for {user.name}")
        return self._result_for(user)

    # =========================================================================
    # OTP AUTHENTICATION
    # =========================================================================

    def _generate_code(self) -> str:
        if self.settings.otp_static_code:
            return self.settings.otp_static_code
        return "".join(secrets.choice("0123456789") for _ in range(self.settings.otp_length))

    async def send_otp(self, phone: str, now: Optional[datetime] = None) -> str:
        """
        Issue an OTP challenge for ``phone``, replacing any pending one.

        Returns:
            str: The generated code
        """
        now = now or datetime.now()
        code = self._generate_code()

        with self.store.otps.locked(phone):
            self.store.otps.put(OtpChallenge(
                phone=phone,
                code=code,
                expires_at=now + timedelta(minutes=self.settings.otp_ttl_minutes),
            ))

        if self.sms is not None:
            result = await self.sms.send_sms(
                phone,
                f"Your verification code is {code}. It expires in "
                f"{self.settings.otp_ttl_minutes} minutes.",
            )
            if not result.success:
                logger.warning(f"OTP delivery to {phone} failed: {result.error_message}")

        logger.info(f"📱 OTP issued for {phone}")
        return code

    def authenticate_by_otp(
        self,
        phone: str,
        code: str,
        now: Optional[datetime] = None,
    ) -> AuthResult:
        """
        Consume the OTP challenge for ``phone`` and sign the user in.

        A first successful verification creates a CUSTOMER account with an
        auto-assigned name and no password.

        Raises:
            OtpNotFound: No pending challenge (never sent or already used)
            OtpExpired: The challenge expired; it is purged
            OtpMismatch: Wrong code; the challenge stays usable
        """
        now = now or datetime.now()

        with self.store.otps.locked(phone):
            challenge = self.store.otps.get(phone)
            if challenge is None:
                raise OtpNotFound()
            if challenge.is_expired(now):
                self.store.otps.delete(phone)
                raise OtpExpired()
            if not secrets.compare_digest(challenge.code.encode(), code.encode()):
                logger.warning(f"OTP mismatch for {phone}")
                raise OtpMismatch()
            self.store.otps.delete(phone)

        user = self.store.users.find_by_phone(phone)
        is_new_user = user is None
        if is_new_user:
            user = self.store.users.add(name=None, phone=phone, role=Role.CUSTOMER)
            logger.info(f"👤 New user created: {user.name}")

        logger.info(f"✅ OTP login successful for {user.name}")
        result = self._result_for(user)
        result.is_new_user = is_new_user
        return result

    # =========================================================================
    # TOKENS
    # =========================================================================

    def issue_token(self, user: User, now: Optional[datetime] = None) -> str:
        """Sign a session token for ``user``."""
        return create_token(
            {
                "sub": str(user.id),
                "role": user.role.value,
                "name": user.name,
                "phone": user.phone,
                "email": user.email,
            },
            now=now,
        )

    def resolve_token(self, token: Optional[str]) -> Session:
        """
        Decode a bearer token into a Session.

        Raises:
            AccessTokenRequired: No token supplied
            InvalidToken: Bad signature, malformed claims or expired
        """
        if not token:
            raise AccessTokenRequired()

        claims = decode_token(token)
        if claims is None:
            raise InvalidToken()

        try:
            return Session(
                user_id=int(claims["sub"]),
                role=Role(claims["role"]),
                name=claims.get("name") or "",
                phone=claims.get("phone"),
                email=claims.get("email"),
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidToken()

    def _result_for(self, user: User) -> AuthResult:
        token = self.issue_token(user)
        return AuthResult(user=user, token=token, session=self.resolve_token(token))
