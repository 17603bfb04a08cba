from ...domain.entities import Application, Identity
from ...domain.errors import Forbidden, NotFound
from .submit_application import IApplicationRepository

# fields the lifecycle owns; applicants never write them
PROTECTED_FIELDS = frozenset({"id", "status", "applicant_email", "feedback", "created_at", "last_modified_at"})


class EditApplicantInfo:
    """Owner-only edit of applicant fields; no lock on the current status."""

    def __init__(self, repo: IApplicationRepository):
        self.repo = repo

    def execute(self, identity: Identity, application_id: str, changes: dict) -> Application:
        current = self.repo.get(application_id)
        if current is None:
            raise NotFound("application", application_id)
        if current.applicant_email != identity.email:
            raise Forbidden("Only the applicant may edit this application")
        allowed = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        return self.repo.update_fields(application_id, allowed)
