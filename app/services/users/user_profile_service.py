# app/services/users/user_profile_service.py
from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from app.repositories.user import ProfileRepository
from app.schemas.user.user_profile import ProfileResponse, ProfileUpdate
from app.services.common import errors
from app.services.common.unit_of_work import UnitOfWork


class UserProfileService:
    """
    Profile read/update. Only fields present in the payload change.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_repo(self, uow: UnitOfWork) -> ProfileRepository:
        return uow.get_repo(ProfileRepository)

    def get_profile(self, user_id: str) -> ProfileResponse:
        with UnitOfWork(self._session_factory) as uow:
            profile = self._get_repo(uow).get_by_user_id(user_id)
            if profile is None:
                raise errors.NotFoundError("Profile", user_id)
            return ProfileResponse.model_validate(profile)

    def update_profile(self, user_id: str, data: ProfileUpdate) -> ProfileResponse:
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_repo(uow)
            profile = repo.get_by_user_id(user_id)
            if profile is None:
                raise errors.NotFoundError("Profile", user_id)

            repo.update(profile, data.changes())
            uow.refresh(profile)
            return ProfileResponse.model_validate(profile)
