"""
Profile service for the authenticated user.
"""

from sqlalchemy.orm import Session

from unistay.core.exceptions import NotFoundError
from unistay.core.permissions import Principal
from unistay.models.user import User
from unistay.repositories.user_repository import UserRepository
from unistay.schemas.user import UserProfileResponse, UserProfileUpdate
from unistay.services.base_service import BaseService


class UserService(BaseService):

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.users = UserRepository(db_session)

    def get_profile(self, principal: Principal) -> UserProfileResponse:
        user = self._get_or_404(principal.user_id)
        return UserProfileResponse.model_validate(user).model_copy(
            update=self.users.activity_counts(user.id)
        )

    def update_profile(self, principal: Principal, data: UserProfileUpdate) -> UserProfileResponse:
        user = self._get_or_404(principal.user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self.transaction():
            self.users.update_fields(user, changes)
        self._logger.info(f"Profile updated for user {user.id}", extra={"fields": sorted(changes)})
        return self.get_profile(principal)

    def _get_or_404(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
