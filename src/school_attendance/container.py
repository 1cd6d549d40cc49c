from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

import httpx

from .attendance.factory import TransitionStrategyFactory
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_API_TIMEOUT
from .lessons.service import DiaryService
from .remote.client import SpreadsheetClient
from .remote.endpoint import ApiEndpoint
from .remote.repository import RemoteDataSource
from .reports.calculator.standard_calculator import GridFrequencyCalculator, StandardFrequencyCalculator
from .reports.service import ReportService
from .roster.service import RosterService
from .school.service import SchoolCalendarService
from .state import AppState
from .storage.local import JsonFileStorage, LocalStorage
from .sync.coordinator import SyncCoordinator
from .sync.queue import PendingChangeQueue


@dataclass(frozen=True)
class Container:
    storage: LocalStorage
    endpoint: ApiEndpoint
    remote: RemoteDataSource
    state: AppState

    roster_service: RosterService
    attendance_service: AttendanceService
    diary_service: DiaryService
    calendar_service: SchoolCalendarService
    report_service: ReportService
    sync: SyncCoordinator


def build_container(
    settings: ModuleType,
    *,
    storage: Optional[LocalStorage] = None,
    remote: Optional[RemoteDataSource] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    storage = storage or JsonFileStorage(str(getattr(settings, "STORAGE_DIR")))
    endpoint = ApiEndpoint(storage, fixed_url=str(getattr(settings, "API_URL", "") or ""))
    remote = remote or SpreadsheetClient(
        endpoint,
        timeout=float(getattr(settings, "API_TIMEOUT", DEFAULT_API_TIMEOUT)),
        transport=transport,
    )

    pending = PendingChangeQueue(storage)
    pending.load()
    state = AppState(pending=pending, online=bool(getattr(settings, "START_ONLINE", True)))

    roster_service = RosterService(state)
    attendance_service = AttendanceService(
        state,
        roster_service,
        strategy_factory=TransitionStrategyFactory(),
        grid_calculator=GridFrequencyCalculator(),
    )
    diary_service = DiaryService(state)
    calendar_service = SchoolCalendarService(state)
    report_service = ReportService(state, calculator=StandardFrequencyCalculator())
    sync = SyncCoordinator(state, remote, storage, roster_service)

    return Container(
        storage=storage,
        endpoint=endpoint,
        remote=remote,
        state=state,
        roster_service=roster_service,
        attendance_service=attendance_service,
        diary_service=diary_service,
        calendar_service=calendar_service,
        report_service=report_service,
        sync=sync,
    )
