# textile_shop/routers/profiles.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from textile_shop.core.auth import require_auth, require_admin
from textile_shop.database import get_session
from textile_shop.models.profile import Profile
from textile_shop.repositories.profile_repo import ProfileRepository
from textile_shop.schemas.profile import ProfileRead, ProfileUpdate
from textile_shop.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])

repo = ProfileRepository()
service = ProfileService(repo)


# -------- Self profile --------


@router.get("/me", response_model=ProfileRead)
def read_me(current: Profile = Depends(require_auth)):
    """
    Return the authenticated profile (created on first request).
    """
    return current


@router.patch("/me", response_model=ProfileRead)
def update_me(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current: Profile = Depends(require_auth),
):
    """
    Update name, phone or delivery address.
    """
    return service.update_me(session, current, payload)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[ProfileRead],
    dependencies=[Depends(require_admin)],
)
def list_clients(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    """
    List shopper profiles (admin only).
    """
    return service.list_clients(session, skip, limit)


@router.get(
    "/{profile_id}",
    response_model=ProfileRead,
    dependencies=[Depends(require_admin)],
)
def get_profile(
    profile_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_profile(session, profile_id)
