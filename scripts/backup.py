"""Backup the device-local blobs (data snapshot and pending attendance queue).

Copies every ``<key>.json`` under STORAGE_DIR into ``backups/<timestamp>/``.
Useful before clearing a browser-less install that still has unsynced edits.
"""

from __future__ import annotations

import importlib
import shutil
from datetime import datetime
from pathlib import Path

from school_attendance.config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    storage_dir = Path(settings.STORAGE_DIR)
    if not storage_dir.is_dir():
        raise SystemExit(f"Nada para copiar: {storage_dir} não existe.")

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir = Path(__file__).resolve().parents[1] / "backups" / ts
    out_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for blob in sorted(storage_dir.glob("*.json")):
        shutil.copy2(blob, out_dir / blob.name)
        copied += 1
    print(f"OK: {copied} arquivo(s) copiado(s) para {out_dir}")


if __name__ == "__main__":
    main()
