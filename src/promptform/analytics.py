"""
Submission analytics across all of an owner's forms.
"""

import datetime as dt
from datetime import datetime, time, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

from promptform.store.base import FormStore


class DailyCount(BaseModel):
    date: dt.date
    count: int = 0
    label: str = Field(..., description='Short display label, e.g. "Oct 19"')


class SubmissionsOverTime(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    submissions: list[DailyCount]
    total_submissions: int = Field(..., alias="totalSubmissions")
    period_days: int = Field(..., alias="periodDays")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


def _label(day: dt.date) -> str:
    return f"{day.strftime('%b')} {day.day}"


async def submissions_over_time(
    store: FormStore,
    owner_id: str,
    days: int = 30,
    today: dt.date | None = None,
) -> SubmissionsOverTime:
    """
    Count an owner's submissions per UTC day.

    Args:
        store: Form store to read from.
        owner_id: Owner whose forms are counted.
        days: Length of the window, ending today. Every day appears, with 0
            when nothing was submitted.
        today: Last day of the window. Defaults to the current UTC date.

    Raises:
        ValueError: `days` is not positive.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    today = today or datetime.now(timezone.utc).date()
    first_day = today - timedelta(days=days - 1)
    counts = {first_day + timedelta(days=i): 0 for i in range(days)}

    forms = await store.list_forms(owner_id)
    since = datetime.combine(first_day, time.min, tzinfo=timezone.utc)
    submissions = await store.list_submissions_since([f.id for f in forms], since)

    total = 0
    for submission in submissions:
        day = submission.submitted_at.astimezone(timezone.utc).date()
        if day in counts:
            counts[day] += 1
            total += 1

    return SubmissionsOverTime(
        submissions=[DailyCount(date=day, count=n, label=_label(day)) for day, n in counts.items()],
        total_submissions=total,
        period_days=days,
    )
