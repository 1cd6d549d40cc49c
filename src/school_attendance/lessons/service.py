from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import month_dates
from ..core.constants import ALL, UNSPECIFIED_SUBJECT
from ..state import AppState


@dataclass(frozen=True)
class DiaryLesson:
    index: int
    subject: str
    topic: str


@dataclass(frozen=True)
class DiaryDay:
    date: str
    lessons: list[DiaryLesson]


@dataclass(frozen=True)
class MonthDiary:
    class_id: str
    days: list[DiaryDay]
    available_subjects: list[str]


class DiaryService:
    """Use case: content diary (what was taught, per class and month)."""

    def __init__(self, state: AppState):
        self._state = state

    def month_diary(self, *, class_id: str, year: int, month: int, subject: str = ALL, search: str = "") -> MonthDiary:
        raw_days: list[DiaryDay] = []
        for iso_date in reversed(month_dates(year, month)):
            day = self._state.lessons.lookup(class_id, iso_date)
            if day is None or not day.active_indices:
                continue
            lessons = [
                DiaryLesson(index=idx, subject=day.subject_for(idx) or UNSPECIFIED_SUBJECT, topic=day.topic_for(idx))
                for idx in day.active_indices
            ]
            raw_days.append(DiaryDay(date=iso_date, lessons=lessons))

        seen = {l.subject for d in raw_days for l in d.lessons if l.subject and l.subject != UNSPECIFIED_SUBJECT}
        available = sorted(set(self._state.registered_subjects) | seen)

        term = (search or "").lower()
        days = []
        for d in raw_days:
            kept = [
                l
                for l in d.lessons
                if (subject == ALL or l.subject == subject)
                and (not term or term in l.subject.lower() or term in l.topic.lower())
            ]
            if kept:
                days.append(DiaryDay(date=d.date, lessons=kept))

        return MonthDiary(class_id=class_id, days=days, available_subjects=available)
