from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import BimesterConfig, Holiday


class SchoolCalendarService:
    """Use case: school-wide settings (subjects, holidays, bimesters), local side."""

    def __init__(self, state: AppState):
        self._state = state

    def add_subject(self, name: str) -> list[str]:
        name = require_non_empty(name, "Matéria")
        if name not in self._state.registered_subjects:
            self._state.registered_subjects = sorted([*self._state.registered_subjects, name])
        return list(self._state.registered_subjects)

    def remove_subject(self, name: str) -> list[str]:
        self._state.registered_subjects = [s for s in self._state.registered_subjects if s != name]
        return list(self._state.registered_subjects)

    def save_holiday(self, *, date: str, name: str, original_date: Optional[str] = None) -> list[Holiday]:
        """Add or edit a holiday; at most one per date, kept sorted by date."""
        try:
            parse_iso_date(date)
        except ValueError:
            raise ValidationError("Data inválida (AAAA-MM-DD)")
        name = require_non_empty(name, "Nome do feriado")

        drop = {date}
        if original_date:
            drop.add(original_date)
        holidays = [h for h in self._state.holidays if h.date not in drop]
        holidays.append(Holiday(date=date, name=name))
        holidays.sort(key=lambda h: h.date)
        self._state.holidays = holidays
        return list(holidays)

    def remove_holiday(self, date: str) -> list[Holiday]:
        self._state.holidays = [h for h in self._state.holidays if h.date != date]
        return list(self._state.holidays)

    def update_bimester(self, bimester_id: int, field: str, value: str) -> BimesterConfig:
        if field not in ("start", "end"):
            raise ValidationError("Campo inválido")
        try:
            parse_iso_date(value)
        except ValueError:
            raise ValidationError("Data inválida (AAAA-MM-DD)")

        for i, bim in enumerate(self._state.bimesters):
            if bim.bimester_id == int(bimester_id):
                updated = replace(bim, **{field: value})
                self._state.bimesters = [*self._state.bimesters[:i], updated, *self._state.bimesters[i + 1:]]
                return updated
        raise ValidationError("Bimestre não encontrado")
