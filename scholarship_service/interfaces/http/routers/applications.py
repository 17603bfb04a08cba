from datetime import date
from typing import Literal
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ....config import settings
from ....domain.entities import Identity
from ....domain.errors import NotFound
from ....domain.lifecycle import parse_object_id
from ....infrastructure.db import get_db
from ....infrastructure.metrics import application_transitions_total, applications_submitted_total
from ....infrastructure.repositories import ApplicationRepository
from ....application.dto import ApplicationInput
from ....application.use_cases.submit_application import SubmitApplication
from ....application.use_cases.edit_applicant_info import EditApplicantInfo
from ....application.use_cases.transition_status import AttachFeedback, TransitionStatus
from ....application.use_cases.list_applications import ListApplications
from ..authz import get_identity, require_admin_or_moderator, require_self, require_self_or_staff
from ..schemas import ApplicantInfo, ApplicationCreate, ApplicationOut, FeedbackUpdate, StatusUpdate

router = APIRouter(tags=["applications"])

SortKey = Literal["applied", "deadline"]


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


@router.post("/add-application", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def add_application(payload: ApplicationCreate, db: Session = Depends(get_db)):
    details = payload.model_dump(exclude={"applicant_email", "scholarship_id", "application_deadline"})
    data = ApplicationInput(
        applicant_email=payload.applicant_email,
        scholarship_id=payload.scholarship_id,
        application_deadline=payload.application_deadline,
        details=details,
    )
    application = SubmitApplication(ApplicationRepository(db), local_tz()).execute(data)
    applications_submitted_total.inc()
    return application


@router.get("/all-applications", response_model=list[ApplicationOut])
def all_applications(
    day: date | None = Query(None, alias="date"),
    sort: SortKey | None = Query(None),
    db: Session = Depends(get_db),
):
    uc = ListApplications(ApplicationRepository(db), local_tz())
    if day is not None:
        return uc.on_day(day, sort)
    return uc.all(sort)


@router.get("/my-applications/{email}", response_model=list[ApplicationOut])
def my_applications(email: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    require_self(email, identity)
    return ListApplications(ApplicationRepository(db), local_tz()).by_applicant(email)


@router.get("/application/{application_id}", response_model=ApplicationOut)
def get_application(application_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    application_id = parse_object_id(application_id)
    application = ApplicationRepository(db).get(application_id)
    if not application:
        raise NotFound("application", application_id)
    require_self_or_staff(application.applicant_email, identity, db)
    return application


@router.put("/applicant-info/{application_id}", response_model=ApplicationOut)
def edit_applicant_info(
    application_id: str,
    payload: ApplicantInfo,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    changes = payload.model_dump(exclude_unset=True)
    return EditApplicantInfo(ApplicationRepository(db)).execute(identity, parse_object_id(application_id), changes)


@router.patch("/application-status/{application_id}", response_model=ApplicationOut,
              dependencies=[Depends(require_admin_or_moderator)])
def change_status(application_id: str, payload: StatusUpdate, db: Session = Depends(get_db)):
    application = TransitionStatus(ApplicationRepository(db)).execute(parse_object_id(application_id), payload.status)
    application_transitions_total.labels(status=payload.status.value).inc()
    return application


@router.patch("/add-feedback/{application_id}", response_model=ApplicationOut,
              dependencies=[Depends(require_admin_or_moderator)])
def add_feedback(application_id: str, payload: FeedbackUpdate, db: Session = Depends(get_db)):
    return AttachFeedback(ApplicationRepository(db)).execute(parse_object_id(application_id), payload.feedback)
