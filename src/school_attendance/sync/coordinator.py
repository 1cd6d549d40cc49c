from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from ..app_logger import get_logger
from ..attendance.store import AttendanceStore
from ..core.constants import DATA_CACHE_KEY
from ..core.enums import EnrollmentStatus, SyncState
from ..core.exceptions import CacheCorruptedError, ConfigurationError, RemoteError
from ..core.outcome import Outcome
from ..lessons.registry import LessonConfigRegistry
from ..remote import codec
from ..remote.repository import RemoteDataSource
from ..roster.model import ClassGroup, Student
from ..roster.service import RosterService, sort_classes
from ..school.model import BimesterConfig, Holiday
from ..state import AppState
from ..storage.local import LocalStorage

logger = get_logger(__name__)

REMOTE_ERRORS = (RemoteError, ConfigurationError)


@dataclass
class DecodedData:
    """A payload fully converted to domain stores. ``None`` means keep the current value."""

    classes: Optional[list[ClassGroup]] = None
    students: Optional[list[Student]] = None
    attendance: Optional[AttendanceStore] = None
    bimesters: Optional[list[BimesterConfig]] = None
    lessons: Optional[LessonConfigRegistry] = None
    registered_subjects: Optional[list[str]] = None
    holidays: Optional[list[Holiday]] = None


class SyncCoordinator:
    """Reconciles AppState with the spreadsheet backend.

    Creates and updates are applied locally first and kept even if the remote
    call fails (the user resyncs later). Deletes are rolled back when the
    remote refuses them. Attendance edits never go through here directly:
    they accumulate in the pending queue and leave with :meth:`flush_attendance`.
    """

    def __init__(self, state: AppState, remote: RemoteDataSource, storage: LocalStorage, roster: RosterService):
        self._state = state
        self._remote = remote
        self._storage = storage
        self._roster = roster
        self._saving = threading.Lock()

    @property
    def is_saving(self) -> bool:
        return self._saving.locked()

    def set_online(self, online: bool) -> None:
        if online != self._state.online:
            logger.info("Network is now %s", "online" if online else "offline")
        self._state.online = bool(online)

    # --- load ---------------------------------------------------------------

    def load(self) -> Outcome:
        self._state.sync_state = SyncState.LOADING
        if not self._remote.is_configured():
            self._state.sync_state = SyncState.ERROR
            return Outcome.failed("URL da API não configurada", needs_setup=True)

        try:
            raw = self._remote.get_data()
            decoded = self._decode(raw)
        except (*REMOTE_ERRORS, CacheCorruptedError) as e:
            logger.error("Failed to load from API, trying cache: %s", e)
            return self._load_from_cache()

        self._commit(decoded)
        self._storage.write(DATA_CACHE_KEY, json.dumps(raw, ensure_ascii=False))
        self._select_initial_class()
        self._state.sync_state = SyncState.READY
        logger.info("Loaded %d class(es), %d student(s)", len(self._state.classes), len(self._state.students))
        return Outcome.ok()

    def _load_from_cache(self) -> Outcome:
        cached = self._storage.read(DATA_CACHE_KEY)
        if cached is None:
            self._state.sync_state = SyncState.ERROR
            return Outcome.failed(
                "Erro ao carregar dados e nenhum cache encontrado. Verifique a URL do Script e sua conexão.",
                needs_setup=True,
            )

        try:
            self._commit(self._decode(self._parse_cache(cached)))
        except CacheCorruptedError:
            logger.exception("Cache corrupted")
            self._state.sync_state = SyncState.ERROR
            return Outcome.failed("Erro ao carregar dados. Verifique sua conexão.")

        self._select_initial_class()
        self._state.sync_state = SyncState.READY
        warning = None
        if self._state.online:
            warning = "Erro ao conectar ao servidor. Carregando dados salvos localmente (Cache)."
        return Outcome.ok("Dados carregados do cache", warning=warning)

    @staticmethod
    def _parse_cache(cached: str) -> dict[str, Any]:
        try:
            data = json.loads(cached)
        except ValueError as e:
            raise CacheCorruptedError("Snapshot local ilegível") from e
        if not isinstance(data, dict):
            raise CacheCorruptedError("Snapshot local ilegível")
        return data

    def _decode(self, raw: Mapping[str, Any]) -> DecodedData:
        """Build every store a getData payload replaces, without touching AppState.

        Any malformed row raises CacheCorruptedError, so a bad payload is
        rejected as a whole.
        """
        try:
            loaded = codec.decode_payload(raw)
            decoded = DecodedData(
                classes=sort_classes(loaded.classes) if loaded.classes is not None else None,
                students=loaded.students,
                attendance=loaded.attendance,
                bimesters=loaded.bimesters or None,
            )
            cfg = loaded.config
            if cfg is not None:
                # Subjects/topics missing from the payload keep their current values
                current = self._state.lessons.to_config_values()
                lesson_config = {"dailyLessonCounts": cfg.get("dailyLessonCounts") or {}}
                for key in ("lessonSubjects", "lessonTopics"):
                    lesson_config[key] = cfg[key] if cfg.get(key) is not None else current[key]
                decoded.lessons = LessonConfigRegistry.from_config(lesson_config)
                if isinstance(cfg.get("registeredSubjects"), list):
                    decoded.registered_subjects = [str(s) for s in cfg["registeredSubjects"]]
                if isinstance(cfg.get("holidays"), list):
                    decoded.holidays = [codec.holiday_from_wire(h) for h in cfg["holidays"]]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CacheCorruptedError("Payload com formato inesperado") from e
        return decoded

    def _commit(self, decoded: DecodedData) -> None:
        """Replace the in-memory stores; ``None`` fields keep their current value."""
        for name in ("classes", "students", "attendance", "bimesters", "lessons", "registered_subjects", "holidays"):
            value = getattr(decoded, name)
            if value is not None:
                setattr(self._state, name, value)

    def _select_initial_class(self) -> None:
        if not self._state.selected_class_id and self._state.classes:
            self._state.selected_class_id = sort_classes(self._state.classes)[0].class_id

    # --- generic push ---------------------------------------------------------

    def _push(self, what: str, call: Callable[[], None], *, offline_message: str, failure_message: str) -> Outcome:
        if not self._state.online:
            logger.warning("Offline: %s saved locally but not synced", what)
            return Outcome.queued_offline(offline_message)
        try:
            call()
        except REMOTE_ERRORS as e:
            logger.error("Failed to save %s: %s", what, e)
            return Outcome.failed(failure_message)
        return Outcome.ok()

    def save_config(self, key: str, value: Any) -> Outcome:
        return self._push(
            f"config {key}",
            lambda: self._remote.save_config(key, value),
            offline_message="Configuração salva localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar configuração online.",
        )

    def save_day_config(
        self,
        class_id: str,
        date: str,
        active_indices: Iterable[int],
        subjects: Mapping[int, str],
        topics: Mapping[int, str],
    ) -> Outcome:
        self._state.lessons.set_day_config(class_id, date, list(active_indices), subjects, topics)
        values = self._state.lessons.to_config_values()

        def push() -> None:
            for key in ("dailyLessonCounts", "lessonSubjects", "lessonTopics"):
                self._remote.save_config(key, values[key])

        return self._push(
            "lesson config",
            push,
            offline_message="Configuração da aula salva localmente, mas não sincronizada.",
            failure_message="Erro ao salvar configuração da aula.",
        )

    def save_registered_subjects(self) -> Outcome:
        return self.save_config("registeredSubjects", list(self._state.registered_subjects))

    def save_holidays(self) -> Outcome:
        return self.save_config("holidays", [codec.holiday_to_wire(h) for h in self._state.holidays])

    def save_bimesters(self) -> Outcome:
        bimesters = list(self._state.bimesters)
        return self._push(
            "bimesters",
            lambda: self._remote.save_all(bimesters=bimesters),
            offline_message="Bimestres salvos localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar bimestres online.",
        )

    # --- roster ---------------------------------------------------------------

    def add_student(self, *, name: str, class_id: Optional[str], status: Optional[EnrollmentStatus] = None) -> tuple[Student, Outcome]:
        student = self._roster.add_student(name=name, class_id=class_id, status=status)
        outcome = self._push(
            "student",
            lambda: self._remote.save_student(student),
            offline_message="Aluno adicionado localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar online. Verifique conexão.",
        )
        return student, outcome

    def add_students(self, names: Iterable[str], *, class_id: str, status: Optional[EnrollmentStatus] = None) -> tuple[list[Student], Outcome]:
        created = self._roster.add_students(names, class_id=class_id, status=status)
        outcome = self._push(
            "students",
            lambda: self._remote.save_all(
                students=list(self._state.students),
                classes=list(self._state.classes),
                bimesters=list(self._state.bimesters),
            ),
            offline_message="Alunos adicionados localmente. Sincronização pendente.",
            failure_message="Erro ao salvar alunos online.",
        )
        return created, outcome

    def save_student(self, student: Student) -> Outcome:
        updated = self._roster.update_student(student)
        return self._push(
            "student",
            lambda: self._remote.save_student(updated),
            offline_message="Alteração salva localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar online.",
        )

    def update_student_status(self, student_id: str, status: EnrollmentStatus) -> Outcome:
        updated = self._roster.set_student_status(student_id, status)
        return self._push(
            "student status",
            lambda: self._remote.save_student(updated),
            offline_message="Situação alterada localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar online.",
        )

    def delete_student(self, student_id: str) -> Outcome:
        snap = self._state.snapshot()
        self._roster.remove_student(student_id)

        if not self._state.online:
            return Outcome.queued_offline(
                "Atenção: a exclusão foi feita localmente. Se recarregar antes de conectar, o aluno voltará."
            )
        try:
            self._remote.delete_student(student_id)
        except REMOTE_ERRORS as e:
            logger.error("Erro ao excluir aluno %s: %s", student_id, e)
            self._state.restore(snap)
            return Outcome.failed("Erro ao excluir online. Revertendo localmente.")
        return Outcome.ok()

    def create_class(self, name: str) -> tuple[ClassGroup, Outcome]:
        created = self._roster.create_class(name)
        outcome = self._push(
            "class",
            lambda: self._remote.save_class(created),
            offline_message="Turma criada localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar turma online.",
        )
        return created, outcome

    def rename_class(self, class_id: str, name: str) -> Outcome:
        updated = self._roster.rename_class(class_id, name)
        return self._push(
            "class",
            lambda: self._remote.save_class(updated),
            offline_message="Turma renomeada localmente. Sincronize quando estiver online.",
            failure_message="Erro ao salvar turma online.",
        )

    def delete_class(self, class_id: str) -> Outcome:
        """Cascade-delete a class locally, then remotely; roll back if the remote fails.

        Pending attendance edits of the removed students are left in the
        queue; the remote discards them on the next flush.
        """
        snap = self._state.snapshot()
        self._roster.remove_class(class_id)

        if not self._state.online:
            return Outcome.queued_offline(
                "Atenção: a exclusão foi feita localmente. Se recarregar antes de conectar, a turma voltará."
            )
        try:
            self._remote.delete_class(class_id)
        except REMOTE_ERRORS as e:
            logger.error("Erro ao excluir turma %s: %s", class_id, e)
            self._state.restore(snap)
            return Outcome.failed("Erro ao excluir turma online. Revertendo localmente.")
        return Outcome.ok()

    # --- attendance -----------------------------------------------------------

    def flush_attendance(self) -> Outcome:
        if not self._state.online:
            return Outcome.queued_offline(
                "Você está OFFLINE. Suas alterações permanecem na fila. Clique em 'Sincronizar' quando a conexão retornar.",
                refused=True,
            )
        if not self._saving.acquire(blocking=False):
            return Outcome.failed("Sincronização já em andamento", refused=True)
        try:
            return self._state.pending.flush(self._remote, online=self._state.online)
        finally:
            self._saving.release()
