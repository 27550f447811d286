# textile_shop/services/profile_service.py
import uuid
from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from sqlmodel import Session

from textile_shop.models.profile import Profile
from textile_shop.repositories.profile_repo import ProfileRepository
from textile_shop.schemas.profile import ProfileUpdate

if TYPE_CHECKING:
    from textile_shop.core.auth import AccessTokenClaims


class ProfileService:
    """
    Business logic for shopper profiles and the admin client list.
    """

    def __init__(self, repo: ProfileRepository):
        self.repo = repo

    def sync_from_claims(self, session: Session, claims: "AccessTokenClaims") -> Profile:
        """
        Return the profile mirroring a verified token, creating it on first sight.

        New profiles start as clients with the name, phone and address found in
        the token. Later logins only refresh the email and fill contact fields
        the shopper left empty; their own edits are never overwritten.
        """
        profile = self.repo.get_by_id(session, claims.sub)
        if profile is None:
            return self.repo.create(
                session,
                Profile(
                    id=claims.sub,
                    email=claims.email,
                    full_name=claims.display_name,
                    phone=claims.contact_phone,
                    address=claims.delivery_address,
                    role="client",
                ),
            )

        changed = False
        if profile.email != claims.email:
            profile.email = claims.email
            changed = True
        if not profile.phone and claims.contact_phone:
            profile.phone = claims.contact_phone
            changed = True
        if not profile.address and claims.delivery_address:
            profile.address = claims.delivery_address
            changed = True

        return self.repo.update(session, profile) if changed else profile

    def update_me(
        self,
        session: Session,
        current: Profile,
        payload: ProfileUpdate,
    ) -> Profile:
        """
        Partial update; only the fields present in the payload change.
        Sending an empty phone/address clears it.
        """
        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "full_name" and value is None:
                continue
            setattr(current, field, value)
        return self.repo.update(session, current)

    # ----- Admin operations -----

    def list_clients(self, session: Session, skip: int, limit: int) -> list[Profile]:
        return self.repo.list_profiles(session, skip=skip, limit=limit, role="client")

    def get_profile(self, session: Session, profile_id: uuid.UUID) -> Profile:
        profile = self.repo.get_by_id(session, profile_id)
        if not profile:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile not found",
            )
        return profile
