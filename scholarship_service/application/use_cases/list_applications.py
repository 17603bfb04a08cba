from datetime import date
from zoneinfo import ZoneInfo

from ...domain.entities import Application
from ...domain.lifecycle import day_range
from .submit_application import IApplicationRepository


class ListApplications:
    def __init__(self, repo: IApplicationRepository, tz: ZoneInfo):
        self.repo = repo
        self.tz = tz

    def all(self, sort: str | None = None) -> list[Application]:
        return self.repo.list_all(sort)

    def by_applicant(self, email: str) -> list[Application]:
        return self.repo.list_by_applicant(email)

    def on_day(self, day: date, sort: str | None = None) -> list[Application]:
        """Applications applied for, or due, on the given local day."""
        start, end = day_range(day, self.tz)
        return self.repo.list_between(start, end, sort)
