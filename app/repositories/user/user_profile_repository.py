"""
Profile Repository - one profile per user.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.user import Profile
from app.repositories.base.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, session: Session):
        super().__init__(Profile, session)

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return self.session.scalars(select(Profile).where(Profile.user_id == user_id)).first()
