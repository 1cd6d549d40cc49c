"""School attendance package.

Organized by feature modules (roster, attendance, lessons, reports, sync, ...)
with a thin Flask controller layer over service/repository layers. All mutable
data lives in one :class:`~school_attendance.state.AppState` owned by the
container.
"""
