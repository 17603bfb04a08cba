from datetime import datetime
from zoneinfo import ZoneInfo

import structlog

from ..dto import ApplicationInput
from ...domain.entities import Application, ApplicationStatus
from ...domain.lifecycle import new_object_id, normalize_deadline, utcnow

logger = structlog.get_logger(__name__)


class IApplicationRepository:
    def get(self, application_id: str) -> Application | None: ...
    def add(self, application: Application) -> Application: ...
    def update_fields(self, application_id: str, changes: dict) -> Application | None: ...
    def set_status(self, application_id: str, status: ApplicationStatus) -> Application | None: ...
    def upsert_feedback(self, application_id: str, feedback: str) -> tuple[Application, bool]: ...
    def list_all(self, sort: str | None = None) -> list[Application]: ...
    def list_by_applicant(self, email: str) -> list[Application]: ...
    def list_between(self, start: datetime, end: datetime, sort: str | None = None) -> list[Application]: ...


class SubmitApplication:
    """Create an application. Whatever the caller sends, it starts out Pending.

    The deadline is stored as an absolute instant but is not enforced as a
    submission cutoff.
    """

    def __init__(self, repo: IApplicationRepository, tz: ZoneInfo):
        self.repo = repo
        self.tz = tz

    def execute(self, data: ApplicationInput) -> Application:
        now = utcnow()
        application = Application(
            id=new_object_id(),
            applicant_email=data.applicant_email,
            scholarship_id=data.scholarship_id,
            status=ApplicationStatus.PENDING,
            application_deadline=normalize_deadline(data.application_deadline, self.tz),
            created_at=now,
            last_modified_at=now,
            **data.details,
        )
        saved = self.repo.add(application)
        logger.info("application_submitted", application_id=saved.id,
                    scholarship_id=saved.scholarship_id)
        return saved
