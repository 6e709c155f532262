import pytest

from sms_portal.utils.academic import (
    compute_result, coerce_score, grade_from_total, leading_int, parse_attendance_form
)


@pytest.mark.parametrize("value, expected", [
    ("42", 42),
    (" 7 ", 7),
    ("12.9", 12),
    ("abc", 0),
    ("", 0),
    (None, 0),
    ("-5", 0),
    (-3, 0),
    (88, 88),
    ("1000", 1000),
])
def test_coerce_score_floors_at_zero(value, expected):
    assert coerce_score(value) == expected


@pytest.mark.parametrize("total, grade", [
    (500, "A+"),
    (450, "A+"),
    (449, "A"),
    (400, "A"),
    (399, "B"),
    (350, "B"),
    (349, "C"),
    (300, "C"),
    (299, "D"),
    (0, "D"),
])
def test_grade_boundaries_are_inclusive(total, grade):
    assert grade_from_total(total) == grade


def test_all_subjects_passing():
    assert compute_result(90, 80, 70, 60, 95) == (395, "B", True)


def test_single_failing_subject_fails_record():
    total, grade, passed = compute_result(90, 80, 70, 20, 95)

    assert total == 355
    assert grade == "B"
    assert passed is False


def test_high_total_does_not_rescue_a_failed_subject():
    total, grade, passed = compute_result(100, 100, 100, 100, 34)

    assert (total, grade) == (434, "A")
    assert passed is False


def test_pass_mark_is_inclusive():
    assert compute_result(35, 35, 35, 35, 35) == (175, "D", True)


def test_malformed_scores_count_as_zero():
    total, grade, passed = compute_result("abc", None, "-10", "50", 60)

    assert total == 110
    assert grade == "D"
    assert passed is False


def test_scores_above_any_maximum_are_accepted():
    assert compute_result(500, 0, 0, 0, 0)[0] == 500


def test_attendance_form_normalises_status():
    entries, skipped = parse_attendance_form({
        "student_1": "present",
        "student_2": "absent",
        "student_3": "PRESENT",
        "student_4": "",
        "submit": "Save",
    })

    assert entries == {1: "present", 2: "absent", 3: "absent", 4: "absent"}
    assert skipped == []


def test_attendance_form_skips_malformed_keys():
    entries, skipped = parse_attendance_form({
        "student_abc": "present",
        "student_": "present",
        "student_0": "present",
        "student_-2": "absent",
        "student_7": "present",
    })

    assert entries == {7: "present"}
    assert sorted(skipped) == ["student_", "student_-2", "student_0", "student_abc"]


def test_leading_integer_reading():
    assert leading_int("12abc") == 12
    assert leading_int(" 7 ") == 7
    assert leading_int("-3") == -3
    assert leading_int("abc") is None
    assert leading_int(None) is None
