from __future__ import annotations

import json
from typing import Any, Callable, Optional, Sequence

import httpx

from ..app_logger import get_logger
from ..attendance.model import PendingChange
from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import ConfigurationError, RemoteError
from ..roster.model import ClassGroup, Student
from ..school.model import BimesterConfig
from . import codec
from .repository import RemoteDataSource

logger = get_logger(__name__)


class SpreadsheetClient(RemoteDataSource):
    """Client for the spreadsheet web app (a single POST endpoint).

    The body is JSON sent as ``text/plain`` and the answer is JSON text.
    ``url_provider`` is called per request so a URL changed at runtime is
    picked up without rebuilding the client.
    """

    def __init__(
        self,
        url_provider: Callable[[], Optional[str]],
        *,
        timeout: float = DEFAULT_API_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._url_provider = url_provider
        self._timeout = float(timeout)
        self._transport = transport

    def is_configured(self) -> bool:
        return bool((self._url_provider() or "").strip())

    def _call(self, action: str, **payload: Any) -> Any:
        url = (self._url_provider() or "").strip()
        if not url:
            raise ConfigurationError("URL da API não configurada")

        body = json.dumps({"action": action, **payload}, ensure_ascii=False)
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport, follow_redirects=True) as c:
                r = c.post(url, content=body.encode("utf-8"), headers={"Content-Type": "text/plain;charset=utf-8"})
            r.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Remote call %s failed: %s", action, e)
            raise RemoteError(f"Falha de comunicação com o servidor ({action})") from e

        try:
            data = json.loads(r.text)
        except ValueError as e:
            logger.error("Failed to parse response for %s: %.200s", action, r.text)
            raise RemoteError("Resposta inválida do servidor") from e

        if isinstance(data, dict) and (data.get("error") or data.get("success") is False):
            raise RemoteError(str(data.get("error") or data.get("message") or f"Ação {action} recusada"))
        return data

    def get_data(self) -> dict[str, Any]:
        data = self._call("getData")
        if not isinstance(data, dict):
            raise RemoteError("Resposta inválida do servidor")
        return data

    def save_student(self, student: Student) -> None:
        self._call("saveStudent", student=codec.student_to_wire(student))

    def delete_student(self, student_id: str) -> None:
        self._call("deleteStudent", id=str(student_id), cascade=True)

    def save_class(self, class_group: ClassGroup) -> None:
        self._call("saveClass", classGroup=codec.class_to_wire(class_group))

    def delete_class(self, class_id: str) -> None:
        self._call("deleteClass", id=str(class_id), cascade=True)

    def save_attendance(self, change: PendingChange) -> None:
        self._call("saveAttendance", record=codec.change_to_wire(change))

    def save_attendance_batch(self, changes: Sequence[PendingChange]) -> None:
        self._call("saveAttendanceBatch", records=[codec.change_to_wire(c) for c in changes])

    def save_config(self, key: str, value: Any) -> None:
        self._call("saveConfig", key=key, value=json.dumps(value, ensure_ascii=False))

    def save_all(
        self,
        *,
        students: Optional[Sequence[Student]] = None,
        classes: Optional[Sequence[ClassGroup]] = None,
        bimesters: Optional[Sequence[BimesterConfig]] = None,
    ) -> None:
        payload: dict[str, Any] = {}
        if students is not None:
            payload["students"] = [codec.student_to_wire(s) for s in students]
        if classes is not None:
            payload["classes"] = [codec.class_to_wire(c) for c in classes]
        if bimesters is not None:
            payload["bimesters"] = [codec.bimester_to_wire(b) for b in bimesters]
        self._call("saveAll", **payload)
