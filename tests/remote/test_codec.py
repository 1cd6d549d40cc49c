from school_attendance.attendance.model import PendingChange
from school_attendance.core.enums import AttendanceStatus, EnrollmentStatus
from school_attendance.remote import codec
from school_attendance.roster.model import Student


def test_student_with_status_in_class_column_is_healed():
    student = codec.student_from_wire({"id": 7, "name": " Ana ", "classId": "Transferência"})

    assert student.student_id == "7"
    assert student.name == "Ana"
    assert student.status is EnrollmentStatus.TRANSFERRED
    assert student.class_id is None


def test_student_registration_class_id_overrides_class_column():
    student = codec.student_from_wire({"id": "s-1", "name": "Ana", "classId": "c-1", "registration": "c-2"})

    assert student.class_id == "c-2"
    assert student.status is EnrollmentStatus.ACTIVE


def test_student_status_label_without_class_loses_class():
    student = codec.student_from_wire({"id": "s-1", "name": "Ana", "classId": "Evasão", "registration": "123"})

    assert student.status is EnrollmentStatus.DROPOUT
    assert student.class_id is None


def test_unknown_enrollment_label_reads_as_other():
    student = codec.student_from_wire({"id": "s-1", "name": "Ana", "classId": "c-1", "situation": "Licença"})

    assert student.status is EnrollmentStatus.OTHER


def test_wire_lesson_index_normalization():
    assert codec.wire_lesson_index(1) == 0
    assert codec.wire_lesson_index("3") == 2
    assert codec.wire_lesson_index(20) == 19
    assert codec.wire_lesson_index(21) == 0
    assert codec.wire_lesson_index(0) == 0
    assert codec.wire_lesson_index("abc") == 0
    assert codec.wire_lesson_index(None) == 0


def test_attendance_ingest_skips_empty_dates_and_reads_unknown_status_as_undefined():
    store = codec.attendance_from_wire([
        {"studentId": "s-1", "date": "05-03-2025", "lessonIndex": 2, "status": "X"},
        {"studentId": "s-1", "date": "", "lessonIndex": 1, "status": "P"},
        {"studentId": "s-2", "date": "2025-03-05T03:00:00.000Z", "lessonIndex": 1, "status": "F"},
    ])

    assert store.statuses("s-1", "2025-03-05") == (AttendanceStatus.UNDEFINED, AttendanceStatus.UNDEFINED)
    assert store.status_at("s-2", "2025-03-05", 0) is AttendanceStatus.ABSENT


def test_change_round_trips_through_wire_format():
    change = PendingChange("s-1", "2025-03-05", 0, AttendanceStatus.PRESENT, subject="Matemática", topic="Frações")

    wire = codec.change_to_wire(change)

    assert wire == {
        "studentId": "s-1",
        "date": "05-03-2025",
        "lessonIndex": 1,
        "status": "P",
        "subject": "Matemática",
        "notes": "Frações",
    }
    store = codec.attendance_from_wire([wire])
    assert store.status_at("s-1", "2025-03-05", 0) is AttendanceStatus.PRESENT


def test_student_to_wire_mirrors_class_into_registration():
    wire = codec.student_to_wire(Student("s-1", "Ana", EnrollmentStatus.DROPOUT, "c-1"))

    assert wire["registration"] == wire["classId"] == "c-1"
    assert wire["situation"] == wire["status"] == "Evasão"
    assert "createdAt" in wire


def test_config_values_are_json_decoded_with_raw_fallback():
    config = codec.config_from_wire([
        {"key": "dailyLessonCounts", "value": '{"2025-03-05": 2}'},
        {"key": "note", "value": "not json"},
    ])

    assert config == {"dailyLessonCounts": {"2025-03-05": 2}, "note": "not json"}


def test_decode_payload_marks_absent_fields_as_none():
    loaded = codec.decode_payload({"classes": [{"id": "c-1", "name": "A"}]})

    assert loaded.classes[0].class_id == "c-1"
    assert loaded.students is None
    assert loaded.attendance is None
    assert loaded.config is None
    assert loaded.bimesters == []
