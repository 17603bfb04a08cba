import structlog

from ...domain.entities import Role, User

logger = structlog.get_logger(__name__)


class IUserRepository:
    def get_by_email(self, email: str) -> User | None: ...
    def get(self, user_id: str) -> User | None: ...
    def list(self, role: Role | None = None) -> list[User]: ...
    def create(self, email: str, name: str | None = None, photo_url: str | None = None,
               role: Role = Role.USER) -> User: ...
    def set_role(self, user_id: str, role: Role) -> User | None: ...
    def delete(self, user_id: str) -> bool: ...


class SignInUser:
    """Record a user the first time they sign in; later sign-ins change nothing."""

    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, email: str, name: str | None = None, photo_url: str | None = None) -> tuple[User, bool]:
        existing = self.repo.get_by_email(email)
        if existing:
            return existing, False
        user = self.repo.create(email, name=name, photo_url=photo_url, role=Role.USER)
        logger.info("user_created", email=email)
        return user, True
