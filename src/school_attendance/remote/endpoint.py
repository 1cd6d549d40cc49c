from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import API_URL_KEY
from ..core.exceptions import ValidationError
from ..storage.local import LocalStorage


class ApiEndpoint:
    """Resolves the spreadsheet web-app URL for :class:`SpreadsheetClient`.

    A URL fixed in the settings always wins; otherwise the one saved at
    runtime in local storage is used.
    """

    def __init__(self, storage: LocalStorage, *, fixed_url: str = ""):
        self._storage = storage
        self._fixed = (fixed_url or "").strip()

    @property
    def is_fixed(self) -> bool:
        return bool(self._fixed)

    def __call__(self) -> Optional[str]:
        if self._fixed:
            return self._fixed
        saved = self._storage.read(API_URL_KEY)
        return saved.strip() if saved else None

    def set(self, url: str) -> str:
        if self._fixed:
            raise ValidationError("A URL da API está fixada na configuração")
        url = require_non_empty(url, "URL da API")
        if not url.startswith(("http://", "https://")):
            raise ValidationError("URL da API inválida")
        self._storage.write(API_URL_KEY, url)
        return url
