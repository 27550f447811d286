# textile_shop/core/auth.py
"""
Identity comes from Supabase Auth: the storefront never sees passwords, it
only verifies the access token and mirrors the shopper into `profiles`.
"""
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from sqlmodel import Session

from textile_shop.core.config import get_settings
from textile_shop.database import get_session
from textile_shop.models.profile import Profile
from textile_shop.repositories.profile_repo import ProfileRepository
from textile_shop.services.profile_service import ProfileService

settings = get_settings()

# auto_error=False so a missing header yields a guest instead of a 403,
# letting public routes share the dependency.
bearer_scheme = HTTPBearer(auto_error=False)

profile_service = ProfileService(ProfileRepository())


class AccessTokenClaims(BaseModel):
    """
    The subset of a Supabase access token the storefront relies on.

    `user_metadata` is whatever the sign-up form stored on the auth user;
    only contact fields are read from it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sub: uuid.UUID
    email: str = Field(min_length=3)
    phone: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, v: str | None) -> str | None:
        # Supabase sends "" for accounts without a verified phone
        return v or None

    def _metadata_text(self, key: str) -> str | None:
        value = self.user_metadata.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @property
    def display_name(self) -> str:
        return (
            self._metadata_text("full_name")
            or self._metadata_text("name")
            or self.email.split("@", 1)[0]
        )

    @property
    def contact_phone(self) -> str | None:
        return self.phone or self._metadata_text("phone")

    @property
    def delivery_address(self) -> str | None:
        return self._metadata_text("address")


def read_access_token(token: str) -> AccessTokenClaims:
    """
    Verify signature and expiry, then parse the claims.

    The audience is not checked; Supabase issues several 'aud' values.

    Raises:
        HTTPException(401): bad signature, expired, or missing sub/email.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return AccessTokenClaims.model_validate(payload)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token claims rejected: {', '.join(fields) or 'payload'}",
        )


def get_current_profile(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Profile | None:
    """Guest (None) without a bearer token, else the shopper's profile."""
    if credentials is None:
        return None
    claims = read_access_token(credentials.credentials)
    return profile_service.sync_from_claims(session, claims)


def require_auth(profile: Profile | None = Depends(get_current_profile)) -> Profile:
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return profile


def require_role(role: str, detail: str) -> Callable[..., Profile]:
    """
    Build a dependency admitting only profiles with `role`.

    Roles are set in the database; a token cannot grant one.
    """

    def dependency(profile: Profile = Depends(require_auth)) -> Profile:
        if profile.role != role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return profile

    dependency.__name__ = f"require_{role}"
    return dependency


# Back office: products, all orders, client list.
require_admin = require_role("admin", "Admin access required")
# Cart and checkout belong to shoppers; admins get 403.
require_client = require_role("client", "Customer access required")
