from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ...domain.entities import ApplicationStatus, Role


class TokenReq(BaseModel):
    # any extra claims are carried into the token as-is
    model_config = ConfigDict(extra="allow")
    email: EmailStr


class TokenResp(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PaymentIntentReq(BaseModel):
    price: float | None = None


class PaymentIntentResp(BaseModel):
    client_secret: str | None = None


class UserSignInReq(BaseModel):
    name: str | None = None
    photo_url: str | None = None


class UserResp(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    email: str
    name: str | None = None
    photo_url: str | None = None
    role: Role
    created_at: datetime | None = None


class UserSignInResp(BaseModel):
    created: bool
    user: UserResp


class RoleResp(BaseModel):
    role: Role | None = None


class RoleUpdate(BaseModel):
    role: Role


class ApplicantInfo(BaseModel):
    applicant_name: str | None = None
    applicant_phone: str | None = None
    applicant_address: str | None = None
    photo_url: str | None = None
    gender: str | None = None
    degree: str | None = None
    ssc_result: str | None = None
    hsc_result: str | None = None
    study_gap: str | None = None


class ApplicationCreate(ApplicantInfo):
    applicant_email: EmailStr
    scholarship_id: str
    scholarship_name: str | None = None
    university_name: str | None = None
    scholarship_category: str | None = None
    subject_category: str | None = None
    application_fees: float | None = None
    service_charge: float | None = None
    application_deadline: datetime | date | None = None


class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    applicant_email: str | None = None
    scholarship_id: str | None = None
    status: ApplicationStatus
    feedback: str | None = None
    application_deadline: datetime | None = None
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


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class FeedbackUpdate(BaseModel):
    feedback: str


class ScholarshipCreate(BaseModel):
    scholarship_name: str
    university_name: str
    university_image: str | None = None
    university_country: str | None = None
    university_city: str | None = None
    university_world_rank: int | None = None
    subject_category: str | None = None
    scholarship_category: str | None = None
    degree: str | None = None
    tuition_fees: float | None = None
    application_fees: float = Field(0, ge=0)
    service_charge: float = Field(0, ge=0)
    stipend: float | None = None
    application_deadline: datetime | date | None = None
    scholarship_description: str | None = None


class ScholarshipUpdate(BaseModel):
    scholarship_name: str | None = None
    university_name: str | None = None
    university_image: str | None = None
    university_country: str | None = None
    university_city: str | None = None
    university_world_rank: int | None = None
    subject_category: str | None = None
    scholarship_category: str | None = None
    degree: str | None = None
    tuition_fees: float | None = None
    application_fees: float | None = Field(None, ge=0)
    service_charge: float | None = Field(None, ge=0)
    stipend: float | None = None
    application_deadline: datetime | date | None = None
    scholarship_description: str | None = None


class ScholarshipOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    scholarship_name: str
    university_name: str
    university_image: str | None = None
    university_country: str | None = None
    university_city: str | None = None
    university_world_rank: int | None = None
    subject_category: str | None = None
    scholarship_category: str | None = None
    degree: str | None = None
    tuition_fees: float | None = None
    application_fees: float
    service_charge: float
    stipend: float | None = None
    application_deadline: datetime | None = None
    scholarship_description: str | None = None
    post_date: datetime
    posted_user_email: str | None = None


class ReviewCreate(BaseModel):
    scholarship_id: str
    scholarship_name: str | None = None
    university_name: str | None = None
    reviewer_email: EmailStr
    reviewer_name: str | None = None
    reviewer_image: str | None = None
    rating: float = Field(ge=0, le=5)
    comment: str | None = None


class ReviewUpdate(BaseModel):
    rating: float | None = Field(None, ge=0, le=5)
    comment: str | None = None


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    scholarship_id: str
    scholarship_name: str | None = None
    university_name: str | None = None
    reviewer_email: str
    reviewer_name: str | None = None
    reviewer_image: str | None = None
    rating: float
    comment: str | None = None
    review_date: datetime


class AverageRatingResp(BaseModel):
    scholarship_id: str
    average_rating: float | None = None
    review_count: int
