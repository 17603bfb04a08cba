from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..domain.lifecycle import new_object_id, utcnow


class Base(DeclarativeBase): pass


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    role: Mapped[str] = mapped_column(String(32), default="User", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"UserORM(id={self.id!r}, email={self.email!r}, role={self.role!r})"


class ApplicationORM(Base):
    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    # nullable: a feedback upsert on an unknown id creates a partial record
    applicant_email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    scholarship_id: Mapped[str | None] = mapped_column(String(32), index=True, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="Pending", nullable=False)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    application_deadline: Mapped[datetime | None] = mapped_column(DateTime, index=True, nullable=True)

    applicant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    applicant_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    applicant_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(32), nullable=True)
    degree: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ssc_result: Mapped[str | None] = mapped_column(String(32), nullable=True)
    hsc_result: Mapped[str | None] = mapped_column(String(32), nullable=True)
    study_gap: Mapped[str | None] = mapped_column(String(32), nullable=True)

    scholarship_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    university_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scholarship_category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    subject_category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    application_fees: Mapped[float | None] = mapped_column(Float, nullable=True)
    service_charge: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True, nullable=False)
    last_modified_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"ApplicationORM(id={self.id!r}, applicant_email={self.applicant_email!r}, status={self.status!r})"


class ScholarshipORM(Base):
    __tablename__ = "scholarships"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    scholarship_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    university_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    university_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    university_country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    university_city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    university_world_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    subject_category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    scholarship_category: Mapped[str | None] = mapped_column(String(64), nullable=True)
    degree: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    tuition_fees: Mapped[float | None] = mapped_column(Float, nullable=True)
    application_fees: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    service_charge: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    stipend: Mapped[float | None] = mapped_column(Float, nullable=True)
    application_deadline: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    scholarship_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    post_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    posted_user_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"ScholarshipORM(id={self.id!r}, scholarship_name={self.scholarship_name!r})"


class ReviewORM(Base):
    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    scholarship_id: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    scholarship_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    university_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewer_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    reviewer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewer_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    review_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"ReviewORM(id={self.id!r}, scholarship_id={self.scholarship_id!r}, rating={self.rating!r})"


__all__ = [
    "Base",
    "UserORM",
    "ApplicationORM",
    "ScholarshipORM",
    "ReviewORM",
]
