from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    USER = "User"
    MODERATOR = "Moderator"
    ADMIN = "Admin"

    @staticmethod
    def allows(role: "Role | str | None", allowed: frozenset["Role"]) -> bool:
        """Flat set membership: Admin does not imply Moderator."""
        if role is None:
            return False
        try:
            return Role(role) in allowed
        except ValueError:
            return False


ADMIN_ONLY = frozenset({Role.ADMIN})
STAFF = frozenset({Role.ADMIN, Role.MODERATOR})


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    ApplicationStatus.PENDING: 0,
    ApplicationStatus.PROCESSING: 1,
    ApplicationStatus.COMPLETED: 2,
    ApplicationStatus.REJECTED: 2,
}


@dataclass(frozen=True)
class Identity:
    email: str
    claims: dict = field(default_factory=dict)


@dataclass(frozen=True)
class User:
    id: str | None
    email: str
    name: str | None = None
    photo_url: str | None = None
    role: Role = Role.USER
    created_at: datetime | None = None


@dataclass(frozen=True)
class Application:
    id: str
    applicant_email: str | None
    scholarship_id: str | None
    status: ApplicationStatus
    application_deadline: datetime | None = None
    feedback: str | None = None
    applicant_name: str | None = None
    applicant_phone: str | None = None
    applicant_address: str | None = None
    photo_url: str | None = None
    gender: str | None = None
    degree: str | None = None
    ssc_result: str | None = None
    hsc_result: str | None = None
    study_gap: str | None = None
    scholarship_name: str | None = None
    university_name: str | None = None
    scholarship_category: str | None = None
    subject_category: str | None = None
    application_fees: float | None = None
    service_charge: float | None = None
    created_at: datetime | None = None
    last_modified_at: datetime | None = None
