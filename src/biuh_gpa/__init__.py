"""
BiUH GPA calculator core.

Percentage scores -> German grades and evaluations, credit-weighted
semester and program averages, and GPA on alternate scales.
"""

from .backend_logic import (
    CourseRecord,
    Evaluation,
    Totals,
    aggregate,
    evaluate,
    format_number,
    is_invalid_input,
    is_valid_credit,
    is_valid_score,
    parse_score,
    rescale_gpa,
    to_secondary_grade,
)
from .catalog import DEFAULT_CATALOG, CourseCatalog, CultureCourseOption
from .config import CREDIT_STANDARD
from .transcript import (
    MajorCourse,
    Semester,
    Transcript,
    add_major_course,
    add_semester,
    new_transcript,
    remove_major_course,
    semester_records,
    summarize,
    transcript_records,
    update_culture_course,
    update_language_score,
    update_major_course,
)

__version__ = "0.1.0"

__all__ = [
    "CourseRecord",
    "Evaluation",
    "Totals",
    "aggregate",
    "evaluate",
    "format_number",
    "is_invalid_input",
    "is_valid_credit",
    "is_valid_score",
    "parse_score",
    "rescale_gpa",
    "to_secondary_grade",
    "DEFAULT_CATALOG",
    "CourseCatalog",
    "CultureCourseOption",
    "CREDIT_STANDARD",
    "MajorCourse",
    "Semester",
    "Transcript",
    "add_major_course",
    "add_semester",
    "new_transcript",
    "remove_major_course",
    "semester_records",
    "summarize",
    "transcript_records",
    "update_culture_course",
    "update_language_score",
    "update_major_course",
]
