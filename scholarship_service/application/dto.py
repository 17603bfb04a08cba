from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class ApplicationInput:
    applicant_email: str
    scholarship_id: str
    application_deadline: datetime | date | str | None = None
    details: dict = field(default_factory=dict)


@dataclass
class PaymentIntentResult:
    client_secret: str | None
    amount: int | None = None
