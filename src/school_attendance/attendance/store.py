from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional

from ..core.enums import AttendanceStatus

StatusArray = tuple[AttendanceStatus, ...]
AttendanceRecord = Mapping[str, StatusArray]


class AttendanceStore:
    """Sparse attendance: student id -> ISO date -> statuses by lesson slot.

    Per-date arrays are replaced whole on every write (tuples, never mutated in
    place) and only ever grow: writing slot ``k`` pads the unset lower slots
    with UNDEFINED, and an existing array is never shortened.
    """

    def __init__(self, records: Optional[Mapping[str, Mapping[str, Iterable[AttendanceStatus]]]] = None):
        self._records: dict[str, dict[str, StatusArray]] = {}
        for student_id, by_date in (records or {}).items():
            self._records[str(student_id)] = {d: tuple(statuses) for d, statuses in by_date.items()}

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, student_id: str) -> AttendanceRecord:
        return dict(self._records.get(student_id, {}))

    def statuses(self, student_id: str, date: str) -> Optional[StatusArray]:
        return self._records.get(student_id, {}).get(date)

    def status_at(self, student_id: str, date: str, lesson_index: int) -> AttendanceStatus:
        statuses = self.statuses(student_id, date) or ()
        if 0 <= lesson_index < len(statuses):
            return statuses[lesson_index]
        return AttendanceStatus.UNDEFINED

    def write(
        self,
        student_id: str,
        date: str,
        lesson_index: int,
        status: AttendanceStatus,
        *,
        min_length: int = 0,
    ) -> StatusArray:
        """Set one cell, growing the date's array as needed; returns the new array.

        ``min_length`` sizes an array created for a date the student has no
        entry for yet (the day's active slot count).
        """
        if lesson_index < 0:
            raise ValueError("lesson_index must be >= 0")

        current = self.statuses(student_id, date)
        if current is None:
            cells = [AttendanceStatus.UNDEFINED] * max(min_length, lesson_index + 1)
        else:
            cells = list(current)
        while len(cells) <= lesson_index:
            cells.append(AttendanceStatus.UNDEFINED)
        cells[lesson_index] = status

        updated = tuple(cells)
        self._records.setdefault(student_id, {})[date] = updated
        return updated

    def remove_students(self, student_ids: Iterable[str]) -> None:
        for student_id in student_ids:
            self._records.pop(student_id, None)

    def copy(self) -> "AttendanceStore":
        clone = AttendanceStore()
        clone._records = {sid: dict(by_date) for sid, by_date in self._records.items()}
        return clone
