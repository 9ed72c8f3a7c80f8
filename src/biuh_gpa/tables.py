import pandas as pd
from typing import Dict, List

from .backend_logic import format_number
from .config import EVALUATION_BANDS, FAILING_LABEL, FAILING_TIER, SCORE_MAX
from .transcript import (
    SemesterView,
    Transcript,
    TranscriptSummary,
    add_major_course,
    new_id,
    remove_major_course,
    semester_label,
    update_major_course,
)

# ------------------------
# DataFrame helpers (UI-side)
# ------------------------

MAJOR_COLUMNS = ["Id", "Course", "Score"]


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow "name" for the course column
    if "name" in df.columns and "course" not in df.columns:
        df = df.rename(columns={"name": "course"})
    return df


def _cell_text(value) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def major_courses_frame(transcript: Transcript, semester_id: str) -> pd.DataFrame:
    """Editable table of a semester's major courses (raw strings, display order)."""
    rows = []
    for semester in transcript.semesters:
        if semester.id != semester_id:
            continue
        for course in semester.major_courses:
            rows.append({"Id": course.id, "Course": course.name, "Score": course.score})
    return pd.DataFrame(rows, columns=MAJOR_COLUMNS)


def apply_major_courses_frame(transcript: Transcript, semester_id: str, df: pd.DataFrame) -> Transcript:
    """
    Fold an edited major-course table back into the transcript.

    Rows with a known Id update that course, rows without one become new
    courses, and courses whose Id no longer appears are removed. Row order
    is kept only for new rows, which are appended.
    """
    df = _normalise_cols(df)
    required = {"course", "score"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Course, Score.")
    if "id" not in df.columns:
        df["id"] = None

    semester = next((s for s in transcript.semesters if s.id == semester_id), None)
    if semester is None:
        return transcript
    existing = {c.id for c in semester.major_courses}

    seen = set()
    for _, row in df.iterrows():
        course_id = _cell_text(row.get("id"))
        name = _cell_text(row.get("course"))
        score = _cell_text(row.get("score"))

        if course_id not in existing or course_id in seen:
            course_id = new_id()
            transcript = add_major_course(transcript, semester_id, course_id)
        seen.add(course_id)
        transcript = update_major_course(transcript, semester_id, course_id, name=name, score=score)

    for course_id in existing - seen:
        transcript = remove_major_course(transcript, semester_id, course_id)
    return transcript


def course_rows_frame(view: SemesterView) -> pd.DataFrame:
    rows = []
    for row in view.rows:
        rows.append(
            {
                "Course": row.name,
                "Credits": row.credit,
                "Score": row.raw,
                "German grade": format_number(row.secondary_grade, 2),
                "Evaluation": row.evaluation.label if row.evaluation else "—",
                "Invalid": row.invalid,
            }
        )
    return pd.DataFrame(rows, columns=["Course", "Credits", "Score", "German grade", "Evaluation", "Invalid"])


def semester_summary_frame(summary: TranscriptSummary) -> pd.DataFrame:
    rows: List[Dict] = []
    for index, view in enumerate(summary.semesters):
        totals = view.totals
        rows.append(
            {
                "Semester": semester_label(index),
                "Courses": totals.count,
                "Credits": format_number(totals.total_credits, 1),
                "Weighted score": format_number(totals.weighted_score, 2),
                "Weighted German grade": format_number(totals.weighted_secondary, 2),
            }
        )
    overall = summary.overall
    rows.append(
        {
            "Semester": "Overall",
            "Courses": overall.count,
            "Credits": format_number(overall.total_credits, 1),
            "Weighted score": format_number(overall.weighted_score, 2),
            "Weighted German grade": format_number(overall.weighted_secondary, 2),
        }
    )
    return pd.DataFrame(rows)


def evaluation_reference_frame() -> pd.DataFrame:
    """Score bands with their German grade and evaluation label."""
    rows = []
    upper = SCORE_MAX
    for lower, tier, label in EVALUATION_BANDS:
        rows.append({"Score": f"{lower:g} - {upper:g}", "German grade": tier, "Evaluation": label})
        upper = lower - 1
    rows.append({"Score": f"< {EVALUATION_BANDS[-1][0]:g}", "German grade": FAILING_TIER, "Evaluation": FAILING_LABEL})
    return pd.DataFrame(rows)
