# textile_shop/repositories/profile_repo.py
import uuid

from sqlmodel import Session, select

from textile_shop.models.profile import Profile


class ProfileRepository:

    def get_by_id(self, session: Session, profile_id: uuid.UUID) -> Profile | None:
        return session.get(Profile, profile_id)

    def list_profiles(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        role: str | None = None,
    ) -> list[Profile]:
        stmt = select(Profile)
        if role:
            stmt = stmt.where(Profile.role == role)
        stmt = stmt.order_by(Profile.created_at.desc()).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def update(self, session: Session, profile: Profile) -> Profile:
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    def create(self, session: Session, profile: Profile) -> Profile:
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile
