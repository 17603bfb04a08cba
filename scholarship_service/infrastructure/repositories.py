from datetime import datetime

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import ApplicationORM, UserORM
from ..domain.entities import Application, ApplicationStatus, Role, User
from ..domain.lifecycle import utcnow
from ..application.use_cases.sign_in_user import IUserRepository
from ..application.use_cases.submit_application import IApplicationRepository

APPLICANT_FIELDS = (
    "applicant_name", "applicant_phone", "applicant_address", "photo_url",
    "gender", "degree", "ssc_result", "hsc_result", "study_gap",
    "scholarship_name", "university_name", "scholarship_category",
    "subject_category", "application_fees", "service_charge",
)


def user_to_domain(u: UserORM) -> User:
    return User(id=u.id, email=u.email, name=u.name, photo_url=u.photo_url,
                role=Role(u.role), created_at=u.created_at)


def application_to_domain(a: ApplicationORM) -> Application:
    return Application(
        id=a.id,
        applicant_email=a.applicant_email,
        scholarship_id=a.scholarship_id,
        status=ApplicationStatus(a.status),
        application_deadline=a.application_deadline,
        feedback=a.feedback,
        created_at=a.created_at,
        last_modified_at=a.last_modified_at,
        **{name: getattr(a, name) for name in APPLICANT_FIELDS},
    )


class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_email(self, email: str) -> User | None:
        row = self.db.query(UserORM).filter(UserORM.email == email).first()
        return user_to_domain(row) if row else None

    def get(self, user_id: str) -> User | None:
        row = self.db.get(UserORM, user_id)
        return user_to_domain(row) if row else None

    def list(self, role: Role | None = None) -> list[User]:
        q = self.db.query(UserORM)
        if role is not None:
            q = q.filter(UserORM.role == role.value)
        return [user_to_domain(r) for r in q.order_by(UserORM.created_at).all()]

    def create(self, email: str, name: str | None = None, photo_url: str | None = None,
               role: Role = Role.USER) -> User:
        row = UserORM(email=email, name=name, photo_url=photo_url, role=role.value)
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return user_to_domain(row)

    def set_role(self, user_id: str, role: Role) -> User | None:
        row = self.db.get(UserORM, user_id)
        if not row:
            return None
        row.role = role.value
        self.db.commit(); self.db.refresh(row)
        return user_to_domain(row)

    def delete(self, user_id: str) -> bool:
        row = self.db.get(UserORM, user_id)
        if not row:
            return False
        self.db.delete(row); self.db.commit()
        return True


class ApplicationRepository(IApplicationRepository):
    def __init__(self, db: Session): self.db = db

    def get(self, application_id: str) -> Application | None:
        row = self.db.get(ApplicationORM, application_id)
        return application_to_domain(row) if row else None

    def add(self, application: Application) -> Application:
        row = ApplicationORM(
            id=application.id,
            applicant_email=application.applicant_email,
            scholarship_id=application.scholarship_id,
            status=application.status.value,
            application_deadline=application.application_deadline,
            feedback=application.feedback,
            created_at=application.created_at,
            last_modified_at=application.last_modified_at,
            **{name: getattr(application, name) for name in APPLICANT_FIELDS},
        )
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return application_to_domain(row)

    def update_fields(self, application_id: str, changes: dict) -> Application | None:
        row = self.db.get(ApplicationORM, application_id)
        if not row:
            return None
        for name, value in changes.items():
            setattr(row, name, value)
        row.last_modified_at = utcnow()
        self.db.commit(); self.db.refresh(row)
        return application_to_domain(row)

    def set_status(self, application_id: str, status: ApplicationStatus) -> Application | None:
        return self.update_fields(application_id, {"status": status.value})

    def upsert_feedback(self, application_id: str, feedback: str) -> tuple[Application, bool]:
        row = self.db.get(ApplicationORM, application_id)
        created = row is None
        if created:
            now = utcnow()
            row = ApplicationORM(id=application_id, status=ApplicationStatus.PENDING.value,
                                 feedback=feedback, created_at=now, last_modified_at=now)
            self.db.add(row)
            try:
                self.db.flush()
            except IntegrityError:
                # a concurrent upsert created the row first; overwrite its feedback
                self.db.rollback()
                row = self.db.get(ApplicationORM, application_id)
                created = False
        row.feedback = feedback
        self.db.commit(); self.db.refresh(row)
        return application_to_domain(row), created

    def list_all(self, sort: str | None = None) -> list[Application]:
        return self._run(self.db.query(ApplicationORM), sort)

    def list_by_applicant(self, email: str) -> list[Application]:
        q = self.db.query(ApplicationORM).filter(ApplicationORM.applicant_email == email)
        return self._run(q, "applied")

    def list_between(self, start: datetime, end: datetime, sort: str | None = None) -> list[Application]:
        """Applications created or due in the half-open range [start, end)."""
        q = self.db.query(ApplicationORM).filter(or_(
            and_(ApplicationORM.created_at >= start, ApplicationORM.created_at < end),
            and_(ApplicationORM.application_deadline >= start, ApplicationORM.application_deadline < end),
        ))
        return self._run(q, sort)

    def _run(self, q, sort: str | None) -> list[Application]:
        if sort == "deadline":
            q = q.order_by(ApplicationORM.application_deadline.asc())
        elif sort == "applied":
            q = q.order_by(ApplicationORM.created_at.desc())
        else:
            q = q.order_by(ApplicationORM.created_at.asc())
        return [application_to_domain(r) for r in q.all()]
