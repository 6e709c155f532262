"""Marks and attendance rules.

Everything here is pure: it turns raw form input into the values that get
persisted, and never touches the database.
"""
import re


SUBJECTS = ("tamil", "english", "maths", "science", "social_science")

PASS_MARK = 35

# Descending thresholds, first match wins
GRADE_BOUNDARIES = (
    (450, "A+"),
    (400, "A"),
    (350, "B"),
    (300, "C"),
)
LOWEST_GRADE = "D"

PRESENT = "present"
ABSENT = "absent"

STUDENT_KEY_PREFIX = "student_"

# Largest id a SERIAL column can hold
MAX_RECORD_ID = 2 ** 31 - 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def leading_int(value):
    """The integer a string starts with, or None. "12.9" and "12abc" give 12."""
    if value is None:
        return None

    if isinstance(value, int) and not isinstance(value, bool):
        return value

    match = _LEADING_INT.match(str(value))
    if not match:
        return None

    return int(match.group(1))


def coerce_score(value):
    """Parse a submitted score, flooring anything unusable at zero.

    Missing, non-numeric and negative values all become 0. Only the leading
    integer part is read, so "12.9" counts as 12. There is no upper bound.
    """
    score = leading_int(value)
    if score is None:
        return 0

    return max(score, 0)


def grade_from_total(total):
    for threshold, grade in GRADE_BOUNDARIES:
        if total >= threshold:
            return grade
    return LOWEST_GRADE


def compute_result(tamil, english, maths, science, social_science):
    """Return ``(total, grade, passed)`` for five subject scores.

    A record passes only when every subject reaches PASS_MARK; the total
    plays no part in it.
    """
    scores = [
        coerce_score(s)
        for s in (tamil, english, maths, science, social_science)
    ]

    total = sum(scores)
    passed = all(score >= PASS_MARK for score in scores)

    return total, grade_from_total(total), passed


def scores_from_form(form):
    return {subject: coerce_score(form.get(subject)) for subject in SUBJECTS}


def attendance_status(value):
    return PRESENT if value == PRESENT else ABSENT


def parse_attendance_form(form):
    """Split an attendance submission into ``(entries, skipped)``.

    ``entries`` maps student id to status for every ``student_<id>`` key.
    Keys whose id is not a positive integer within MAX_RECORD_ID land in
    ``skipped``. Fields
    without the prefix are not attendance and are ignored.
    """
    entries = {}
    skipped = []

    for key, value in form.items():
        if not key.startswith(STUDENT_KEY_PREFIX):
            continue

        raw_id = key[len(STUDENT_KEY_PREFIX):]
        if not (raw_id.isascii() and raw_id.isdigit()) or not 0 < int(raw_id) <= MAX_RECORD_ID:
            skipped.append(key)
            continue

        entries[int(raw_id)] = attendance_status(value)

    return entries, skipped
