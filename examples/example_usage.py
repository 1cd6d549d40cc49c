"""Example: drive the service layer directly (no Flask).

Loads from the configured spreadsheet (or the local cache) and prints the
global dashboard numbers plus the at-risk list.
"""

import importlib

from school_attendance.app_logger import setup_logging
from school_attendance.config import get_settings_module
from school_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", None))
    container = build_container(settings)

    outcome = container.sync.load()
    if not outcome.is_ok:
        raise SystemExit(outcome.message)
    if outcome.warning:
        print(outcome.warning)

    dashboard = container.report_service.build_dashboard()
    print(f"Frequência global: {dashboard.global_rate}% ({dashboard.total_recorded} registros)")
    for row in dashboard.at_risk:
        print(f"  {row.student.name}: {row.percentage:.1f}% ({row.absent} faltas)")


if __name__ == "__main__":
    main()
