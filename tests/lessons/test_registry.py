from school_attendance.lessons.registry import LessonConfigRegistry, resolve_config_value


def test_composite_key_wins_over_bare_date():
    mapping = {"c-1_2025-03-05": [0, 1, 2], "2025-03-05": [0]}

    assert resolve_config_value(mapping, "c-1", "2025-03-05", [9]) == [0, 1, 2]


def test_bare_date_used_when_no_composite_key():
    mapping = {"2025-03-05": [0, 1]}

    assert resolve_config_value(mapping, "c-1", "2025-03-05", [9]) == [0, 1]


def test_default_when_nothing_configured():
    assert resolve_config_value({}, "c-1", "2025-03-05", [0]) == [0]


def test_empty_composite_value_still_wins():
    mapping = {"c-1_2025-03-05": [], "2025-03-05": [0, 1]}

    assert resolve_config_value(mapping, "c-1", "2025-03-05", [0]) == []


def test_from_config_expands_legacy_counts_and_int_slot_keys():
    registry = LessonConfigRegistry.from_config({
        "dailyLessonCounts": {"2025-03-05": 3, "c-1_2025-03-06": [1, 3], "bad": "x"},
        "lessonSubjects": {"c-1_2025-03-06": {"1": "História"}},
    })

    assert registry.active_indices("c-9", "2025-03-05") == (0, 1, 2)
    day = registry.resolve("c-1", "2025-03-06")
    assert day.active_indices == (1, 3)
    assert day.subject_for(1) == "História"
    assert registry.lookup("c-1", "bad") is None


def test_set_day_config_round_trips_through_config_values():
    registry = LessonConfigRegistry()
    registry.set_day_config("c-1", "2025-03-05", [0, 2], {2: "Artes"}, {2: "Cores"})

    values = registry.to_config_values()

    assert values["dailyLessonCounts"] == {"c-1_2025-03-05": [0, 2]}
    assert values["lessonSubjects"] == {"c-1_2025-03-05": {"2": "Artes"}}
    assert LessonConfigRegistry.from_config(values).resolve("c-1", "2025-03-05").topic_for(2) == "Cores"


def test_lookup_is_none_for_unconfigured_day():
    assert LessonConfigRegistry().lookup("c-1", "2025-03-05") is None
