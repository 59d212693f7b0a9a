"""
Job Eligibility Service

PURPOSE:
Decide whether a student may apply to a job posting.

A student is eligible when ALL of these hold:
1. CGPA >= job minimum CGPA (numeric comparison, "8.00" == 8.0)
2. Student branch is in the job's allowed branches
3. Student course is in the job's allowed courses

A missing or incomplete profile is simply "not eligible" - never an error.
Used both to annotate the job list and to gate application submission.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional


def parse_grade(value: Any) -> Optional[Decimal]:
    """
    Parse a grade-point value into a Decimal.

    Database/JSON values arrive as Decimal, float, int or decimal text.
    Returns None for missing, blank or unparseable values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def is_eligible(profile: Any, job: Any) -> bool:
    """
    Check one (student profile, job) pair.

    Args:
        profile: Object with cgpa, branch, course (ORM row or record), or None
        job: Object with min_cgpa, allowed_branches, allowed_courses

    Returns:
        True only if the grade, branch and course checks all pass
    """
    if profile is None or job is None:
        return False

    grade = parse_grade(getattr(profile, "cgpa", None))
    min_grade = parse_grade(getattr(job, "min_cgpa", None))
    branch = getattr(profile, "branch", None)
    course = getattr(profile, "course", None)

    if grade is None or min_grade is None or not branch or not course:
        return False

    allowed_branches = getattr(job, "allowed_branches", None) or []
    allowed_courses = getattr(job, "allowed_courses", None) or []

    return grade >= min_grade and branch in allowed_branches and course in allowed_courses


def filter_eligible(profile: Any, jobs: Iterable[Any]) -> List[Any]:
    """Jobs the student is eligible for, in their original order."""
    return [job for job in jobs if is_eligible(profile, job)]
