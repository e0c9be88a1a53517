"""Identity gateway: turns bearer credentials into verified subjects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Final

from jose import JWTError, jwt

from waste_cycle.core.errors import UnauthenticatedError
from waste_cycle.core.settings import settings

logger = logging.getLogger(__name__)

# Provider uids are short opaque strings; anything longer is a credential
# that was passed where a resolved identity was expected.
MAX_SUBJECT_LENGTH: Final[int] = 100


@dataclass(frozen=True)
class Subject:
    """Authenticated caller as resolved by the identity provider.

    Instances are only built from verified token claims, so code receiving a
    ``Subject`` never handles the raw credential.
    """

    uid: str
    display_name: str | None = None
    email: str | None = None

    @property
    def email_local_part(self) -> str | None:
        """Return the part of the email address before ``@``, if any."""
        return email_local_part(self.email)


def email_local_part(email: str | None) -> str | None:
    """Return the mailbox name of ``email`` or ``None`` when unavailable."""
    if not email:
        return None
    local = email.split("@", 1)[0].strip()
    return local or None


def _claim_str(claims: dict[str, Any], name: str) -> str | None:
    value = claims.get(name)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class IdentityGateway:
    """Verify identity-provider tokens and extract the subject claims."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str,
        *,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience

    def verify(self, token: str) -> Subject:
        """Validate ``token`` and return the subject it was issued for.

        Raises:
            UnauthenticatedError: If the token is invalid, expired, or its
                principal claim is missing or malformed.
        """
        if not token:
            raise UnauthenticatedError("Could not validate credentials")
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                audience=self._audience,
                options={"verify_aud": self._audience is not None},
            )
        except JWTError as err:
            logger.info("Rejected identity token: %s", err)
            raise UnauthenticatedError("Could not validate credentials") from err

        uid = claims.get("sub", claims.get("user_id"))
        if not isinstance(uid, str) or not uid:
            raise UnauthenticatedError("User ID not found - uid is required")
        if len(uid) > MAX_SUBJECT_LENGTH:
            logger.warning("Rejected subject claim of length %d", len(uid))
            raise UnauthenticatedError("Invalid user ID - uid appears to be a token string")

        return Subject(
            uid=uid,
            display_name=_claim_str(claims, "name"),
            email=_claim_str(claims, "email"),
        )


def create_identity_token(
    uid: str,
    *,
    name: str | None = None,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Mint a token the gateway accepts, for development and tests."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload: dict[str, Any] = {"sub": uid, "iat": now, "exp": expire}
    if name is not None:
        payload["name"] = name
    if email is not None:
        payload["email"] = email
    if settings.identity_issuer:
        payload["iss"] = settings.identity_issuer
    if settings.identity_audience:
        payload["aud"] = settings.identity_audience
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def get_identity_gateway() -> IdentityGateway:
    """Return a gateway configured from application settings."""
    return IdentityGateway(
        settings.secret_key,
        settings.jwt_algorithm,
        issuer=settings.identity_issuer,
        audience=settings.identity_audience,
    )
