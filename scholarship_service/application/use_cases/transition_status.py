import structlog

from ...domain.entities import Application, ApplicationStatus
from ...domain.errors import NotFound
from ...domain.lifecycle import check_transition
from .submit_application import IApplicationRepository

logger = structlog.get_logger(__name__)


class TransitionStatus:
    def __init__(self, repo: IApplicationRepository, check=check_transition):
        self.repo = repo
        self.check = check

    def execute(self, application_id: str, target: ApplicationStatus) -> Application:
        current = self.repo.get(application_id)
        if current is None:
            raise NotFound("application", application_id)
        self.check(current.status, target)
        updated = self.repo.set_status(application_id, target)
        logger.info("application_status_changed", application_id=application_id,
                    from_status=current.status.value, to_status=target.value)
        return updated


class AttachFeedback:
    """Set or overwrite feedback; status is left alone.

    An unknown id is not an error: a partial Pending record holding only
    the feedback is created, so repeating the call is safe.
    """

    def __init__(self, repo: IApplicationRepository):
        self.repo = repo

    def execute(self, application_id: str, feedback: str) -> Application:
        application, created = self.repo.upsert_feedback(application_id, feedback)
        if created:
            logger.warning("feedback_created_application", application_id=application_id)
        return application
