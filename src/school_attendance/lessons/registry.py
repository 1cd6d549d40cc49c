from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TypeVar

from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_ACTIVE_INDICES

T = TypeVar("T")


def config_key(class_id: str, date: str) -> str:
    """Composite key for per-class-per-day configuration."""
    return f"{class_id}_{date}"


def resolve_config_value(mapping: Mapping[str, T], class_id: Optional[str], date: str, default: T) -> T:
    """Look a day up by ``"{class_id}_{date}"``, then by bare ``date``, then ``default``.

    The composite key wins whenever it is present, even when its value is
    empty. Bare-date keys are data written before configuration was per class.
    """
    composite = config_key(class_id or "", date)
    if composite in mapping:
        return mapping[composite]
    if date in mapping:
        return mapping[date]
    return default


def normalize_active_config(raw: Mapping[str, Any]) -> dict[str, tuple[int, ...]]:
    """Legacy numeric lesson counts ``N`` become ``(0, ..., N-1)``; lists are kept."""
    normalized: dict[str, tuple[int, ...]] = {}
    if not isinstance(raw, Mapping):
        return normalized
    for key, value in (raw or {}).items():
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            normalized[key] = tuple(range(max(int(value), 0)))
        elif isinstance(value, (list, tuple)):
            normalized[key] = tuple(int(v) for v in value)
    return normalized


def normalize_slot_map(raw: Mapping[str, Any]) -> dict[str, dict[int, str]]:
    """JSON object keys are strings; slot indices are ints internally."""
    out: dict[str, dict[int, str]] = {}
    if not isinstance(raw, Mapping):
        return out
    for key, slots in (raw or {}).items():
        if not isinstance(slots, Mapping):
            continue
        day: dict[int, str] = {}
        for idx, text in slots.items():
            try:
                day[int(idx)] = "" if text is None else str(text)
            except (TypeError, ValueError):
                continue
        out[key] = day
    return out


@dataclass(frozen=True)
class DayConfig:
    active_indices: tuple[int, ...] = DEFAULT_ACTIVE_INDICES
    subjects: Mapping[int, str] = field(default_factory=dict)
    topics: Mapping[int, str] = field(default_factory=dict)

    def subject_for(self, lesson_index: int) -> str:
        return self.subjects.get(lesson_index, "") or ""

    def topic_for(self, lesson_index: int) -> str:
        return self.topics.get(lesson_index, "") or ""


class LessonConfigRegistry:
    """Per class+date lesson configuration: active slots, subjects and topics.

    Every reader (grid, statistics, diary) goes through :meth:`resolve` so
    they agree on key precedence.
    """

    def __init__(
        self,
        active: Optional[Mapping[str, tuple[int, ...]]] = None,
        subjects: Optional[Mapping[str, Mapping[int, str]]] = None,
        topics: Optional[Mapping[str, Mapping[int, str]]] = None,
    ):
        self._active: dict[str, tuple[int, ...]] = dict(active or {})
        self._subjects: dict[str, dict[int, str]] = {k: dict(v) for k, v in (subjects or {}).items()}
        self._topics: dict[str, dict[int, str]] = {k: dict(v) for k, v in (topics or {}).items()}

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LessonConfigRegistry":
        return cls(
            active=normalize_active_config(config.get("dailyLessonCounts") or {}),
            subjects=normalize_slot_map(config.get("lessonSubjects") or {}),
            topics=normalize_slot_map(config.get("lessonTopics") or {}),
        )

    def set_day_config(
        self,
        class_id: str,
        date: str,
        active_indices,
        subjects_by_slot: Mapping[int, str],
        topics_by_slot: Mapping[int, str],
    ) -> DayConfig:
        indices = tuple(require_non_negative(active_indices, "Índice de aula"))
        subjects = {int(k): str(v) for k, v in (subjects_by_slot or {}).items()}
        topics = {int(k): str(v) for k, v in (topics_by_slot or {}).items()}

        key = config_key(class_id, date)
        self._active[key] = indices
        self._subjects[key] = subjects
        self._topics[key] = topics
        return DayConfig(active_indices=indices, subjects=dict(subjects), topics=dict(topics))

    def resolve(self, class_id: Optional[str], date: str) -> DayConfig:
        return DayConfig(
            active_indices=tuple(resolve_config_value(self._active, class_id, date, DEFAULT_ACTIVE_INDICES)),
            subjects=dict(resolve_config_value(self._subjects, class_id, date, {})),
            topics=dict(resolve_config_value(self._topics, class_id, date, {})),
        )

    def lookup(self, class_id: Optional[str], date: str) -> Optional[DayConfig]:
        """Like :meth:`resolve`, but ``None`` when the day was never configured."""
        if config_key(class_id or "", date) not in self._active and date not in self._active:
            return None
        return self.resolve(class_id, date)

    def active_indices(self, class_id: Optional[str], date: str) -> tuple[int, ...]:
        return self.resolve(class_id, date).active_indices

    def to_config_values(self) -> dict[str, dict]:
        """Values for the ``dailyLessonCounts``/``lessonSubjects``/``lessonTopics`` config rows."""
        return {
            "dailyLessonCounts": {k: list(v) for k, v in self._active.items()},
            "lessonSubjects": {k: {str(i): s for i, s in v.items()} for k, v in self._subjects.items()},
            "lessonTopics": {k: {str(i): s for i, s in v.items()} for k, v in self._topics.items()},
        }
