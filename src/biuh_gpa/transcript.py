"""
Transcript model: semesters, their raw inputs, and the derivation of course
records for the aggregator.

Every value here is frozen. Operations take a Transcript and return a new
one; the semester (and course) being edited is rebuilt with
dataclasses.replace and everything else is shared with the old snapshot.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from .backend_logic import (
    CourseRecord,
    Evaluation,
    Totals,
    aggregate,
    evaluate,
    is_invalid_input,
    parse_score,
    rescale_gpa,
    to_secondary_grade,
)
from .catalog import DEFAULT_CATALOG, CourseCatalog
from .config import CREDIT_LANGUAGE, CREDIT_MAJOR, GPA_SCALES, LANGUAGE_COURSES

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


# ------------------------
# Entities
# ------------------------
@dataclass(frozen=True)
class MajorCourse:
    id: str
    name: str = ""
    score: str = ""


@dataclass(frozen=True)
class CultureSelection:
    course_key: str
    score: str = ""


@dataclass(frozen=True)
class Semester:
    id: str
    english: str = ""
    german: str = ""
    major_courses: Tuple[MajorCourse, ...] = ()
    culture: CultureSelection = field(default_factory=lambda: CultureSelection(DEFAULT_CATALOG.default.key))


@dataclass(frozen=True)
class Transcript:
    semesters: Tuple[Semester, ...] = ()
    active_id: Optional[str] = None


# ------------------------
# Derived views
# ------------------------
@dataclass(frozen=True)
class CourseRow:
    """A record plus what the presentation layer shows next to it."""

    name: str
    credit: float
    raw: str
    score: Optional[float]
    secondary_grade: Optional[float]
    evaluation: Optional[Evaluation]
    invalid: bool
    course_id: Optional[str] = None

    @property
    def record(self) -> CourseRecord:
        return CourseRecord(name=self.name, credit=self.credit, score=self.score)


@dataclass(frozen=True)
class SemesterView:
    id: str
    rows: Tuple[CourseRow, ...]
    totals: Totals
    culture_key: str

    @property
    def records(self) -> List[CourseRecord]:
        return [row.record for row in self.rows]


@dataclass(frozen=True)
class TranscriptSummary:
    semesters: Tuple[SemesterView, ...]
    overall: Totals
    # target scale -> rescaled cumulative average
    gpa: Dict[int, Optional[float]]

    @property
    def gpa_on_scale4(self) -> Optional[float]:
        return self.gpa.get(4)

    @property
    def gpa_on_scale5(self) -> Optional[float]:
        return self.gpa.get(5)


# ------------------------
# Construction
# ------------------------
def create_semester(catalog: CourseCatalog = DEFAULT_CATALOG, semester_id: Optional[str] = None) -> Semester:
    return Semester(
        id=semester_id or new_id(),
        major_courses=(MajorCourse(id=new_id()),),
        culture=CultureSelection(course_key=catalog.default.key),
    )


def new_transcript(catalog: CourseCatalog = DEFAULT_CATALOG) -> Transcript:
    semester = create_semester(catalog)
    return Transcript(semesters=(semester,), active_id=semester.id)


# ------------------------
# Operations
# ------------------------
def _update_semester(transcript: Transcript, semester_id: str, updater) -> Transcript:
    found = changed = False
    semesters = []
    for semester in transcript.semesters:
        if semester.id == semester_id:
            found = True
            updated = updater(semester)
            changed = updated is not semester
            semester = updated
        semesters.append(semester)

    if not found:
        logger.debug("No semester with id %r, transcript left unchanged", semester_id)
        return transcript
    if not changed:
        return transcript
    return replace(transcript, semesters=tuple(semesters))


def add_semester(
    transcript: Transcript,
    catalog: CourseCatalog = DEFAULT_CATALOG,
    semester_id: Optional[str] = None,
) -> Transcript:
    semester = create_semester(catalog, semester_id)
    return replace(transcript, semesters=transcript.semesters + (semester,), active_id=semester.id)


def add_major_course(transcript: Transcript, semester_id: str, course_id: Optional[str] = None) -> Transcript:
    course = MajorCourse(id=course_id or new_id())
    return _update_semester(
        transcript,
        semester_id,
        lambda s: replace(s, major_courses=s.major_courses + (course,)),
    )


def remove_major_course(transcript: Transcript, semester_id: str, course_id: str) -> Transcript:
    # Removing the last course is allowed here; the UI guards against it
    def updater(semester: Semester) -> Semester:
        kept = tuple(c for c in semester.major_courses if c.id != course_id)
        if len(kept) == len(semester.major_courses):
            logger.debug("No major course %r in semester %r", course_id, semester_id)
            return semester
        return replace(semester, major_courses=kept)

    return _update_semester(transcript, semester_id, updater)


def update_major_course(
    transcript: Transcript,
    semester_id: str,
    course_id: str,
    name: Optional[str] = None,
    score: Optional[str] = None,
) -> Transcript:
    changes = {}
    if name is not None:
        changes["name"] = name
    if score is not None:
        changes["score"] = score
    if not changes:
        return transcript

    def updater(semester: Semester) -> Semester:
        if not any(c.id == course_id for c in semester.major_courses):
            logger.debug("No major course %r in semester %r", course_id, semester_id)
            return semester
        courses = tuple(replace(c, **changes) if c.id == course_id else c for c in semester.major_courses)
        return replace(semester, major_courses=courses)

    return _update_semester(transcript, semester_id, updater)


def update_language_score(transcript: Transcript, semester_id: str, language: str, value) -> Transcript:
    if language not in LANGUAGE_COURSES:
        raise ValueError(f"language must be one of {sorted(LANGUAGE_COURSES)} (got {language!r})")
    return _update_semester(transcript, semester_id, lambda s: replace(s, **{language: value}))


def update_culture_course(
    transcript: Transcript,
    semester_id: str,
    course_key: Optional[str] = None,
    score: Optional[str] = None,
) -> Transcript:
    changes = {}
    if course_key is not None:
        changes["course_key"] = course_key
    if score is not None:
        changes["score"] = score
    if not changes:
        return transcript

    return _update_semester(
        transcript,
        semester_id,
        lambda s: replace(s, culture=replace(s.culture, **changes)),
    )


def set_active_semester(transcript: Transcript, semester_id: str) -> Transcript:
    return replace(transcript, active_id=semester_id)


def active_index(transcript: Transcript) -> int:
    """Index of the active semester; 0 when the pointer is unset or stale."""
    for i, semester in enumerate(transcript.semesters):
        if semester.id == transcript.active_id:
            return i
    return 0


def active_semester(transcript: Transcript) -> Optional[Semester]:
    if not transcript.semesters:
        return None
    return transcript.semesters[active_index(transcript)]


def semester_label(index: int) -> str:
    return f"Semester {index + 1}"


# ------------------------
# Derivation
# ------------------------
def _row(name, credit, raw, course_id=None) -> CourseRow:
    score = parse_score(raw)
    return CourseRow(
        name=name,
        credit=credit,
        raw="" if raw is None else str(raw),
        score=score,
        secondary_grade=to_secondary_grade(score),
        evaluation=evaluate(score),
        invalid=is_invalid_input(score),
        course_id=course_id,
    )


def semester_rows(semester: Semester, catalog: CourseCatalog = DEFAULT_CATALOG) -> List[CourseRow]:
    """English, German, each major course, then the culture course."""
    rows = [
        _row(display, CREDIT_LANGUAGE, getattr(semester, language), language)
        for language, display in LANGUAGE_COURSES.items()
    ]
    rows.extend(_row(c.name, CREDIT_MAJOR, c.score, c.id) for c in semester.major_courses)

    option = catalog.resolve(semester.culture.course_key)
    rows.append(_row(option.label, option.credit, semester.culture.score, option.key))
    return rows


def semester_records(semester: Semester, catalog: CourseCatalog = DEFAULT_CATALOG) -> List[CourseRecord]:
    return [row.record for row in semester_rows(semester, catalog)]


def transcript_records(transcript: Transcript, catalog: CourseCatalog = DEFAULT_CATALOG) -> List[CourseRecord]:
    records: List[CourseRecord] = []
    for semester in transcript.semesters:
        records.extend(semester_records(semester, catalog))
    return records


def derive_semester_view(semester: Semester, catalog: CourseCatalog = DEFAULT_CATALOG) -> SemesterView:
    rows = tuple(semester_rows(semester, catalog))
    return SemesterView(
        id=semester.id,
        rows=rows,
        totals=aggregate(row.record for row in rows),
        culture_key=catalog.resolve(semester.culture.course_key).key,
    )


def summarize(transcript: Transcript, catalog: CourseCatalog = DEFAULT_CATALOG) -> TranscriptSummary:
    views = tuple(derive_semester_view(s, catalog) for s in transcript.semesters)

    all_records: List[CourseRecord] = []
    for view in views:
        all_records.extend(view.records)
    overall = aggregate(all_records)

    return TranscriptSummary(
        semesters=views,
        overall=overall,
        gpa={scale: rescale_gpa(overall.weighted_score, scale) for scale in GPA_SCALES},
    )
