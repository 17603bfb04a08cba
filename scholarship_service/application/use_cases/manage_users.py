import structlog

from ...domain.entities import Role, User
from ...domain.errors import NotFound
from .sign_in_user import IUserRepository

logger = structlog.get_logger(__name__)


class ChangeUserRole:
    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, user_id: str, role: Role) -> User:
        user = self.repo.set_role(user_id, role)
        if user is None:
            raise NotFound("user", user_id)
        logger.info("user_role_changed", user_id=user_id, role=role.value)
        return user


class DeleteUser:
    # applications keep their applicant_email; orphans are tolerated
    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, user_id: str) -> None:
        if not self.repo.delete(user_id):
            raise NotFound("user", user_id)
        logger.info("user_deleted", user_id=user_id)
