import unittest

import numpy as np
import pandas as pd

from biuh_gpa.tables import (
    apply_major_courses_frame,
    course_rows_frame,
    evaluation_reference_frame,
    major_courses_frame,
    semester_summary_frame,
)
from biuh_gpa.transcript import (
    Transcript,
    add_major_course,
    create_semester,
    derive_semester_view,
    summarize,
    update_language_score,
    update_major_course,
)


def one_semester() -> Transcript:
    semester = create_semester(semester_id="s1")
    t = Transcript(semesters=(semester,), active_id="s1")
    first = semester.major_courses[0].id
    t = update_major_course(t, "s1", first, name="Analysis", score="70")
    t = add_major_course(t, "s1", course_id="m2")
    return update_major_course(t, "s1", "m2", name="Physics", score="abc")


class TestMajorCoursesFrame(unittest.TestCase):
    def test_frame_lists_courses_in_order(self) -> None:
        df = major_courses_frame(one_semester(), "s1")
        self.assertEqual(list(df.columns), ["Id", "Course", "Score"])
        self.assertEqual(list(df["Course"]), ["Analysis", "Physics"])
        self.assertEqual(list(df["Score"]), ["70", "abc"])

    def test_unknown_semester_gives_empty_frame(self) -> None:
        df = major_courses_frame(one_semester(), "nope")
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), ["Id", "Course", "Score"])


class TestApplyMajorCoursesFrame(unittest.TestCase):
    def test_edit_add_and_remove(self) -> None:
        t = one_semester()
        df = major_courses_frame(t, "s1")
        first_id = df.loc[0, "Id"]

        edited = pd.DataFrame(
            [
                {"Id": first_id, "Course": "Analysis I", "Score": "75"},
                {"Id": None, "Course": "Chemistry", "Score": np.nan},
            ]
        )
        t2 = apply_major_courses_frame(t, "s1", edited)
        courses = t2.semesters[0].major_courses

        self.assertEqual([c.name for c in courses], ["Analysis I", "Chemistry"])
        self.assertEqual(courses[0].id, first_id)
        self.assertEqual(courses[0].score, "75")
        self.assertEqual(courses[1].score, "")
        self.assertNotIn("m2", [c.id for c in courses])

    def test_roundtrip_without_edits_keeps_courses(self) -> None:
        t = one_semester()
        t2 = apply_major_courses_frame(t, "s1", major_courses_frame(t, "s1"))
        self.assertEqual(t2.semesters[0].major_courses, t.semesters[0].major_courses)

    def test_missing_id_column_replaces_rows(self) -> None:
        t = one_semester()
        edited = pd.DataFrame([{"name": "Optics", "score": "81"}])
        t2 = apply_major_courses_frame(t, "s1", edited)
        courses = t2.semesters[0].major_courses
        self.assertEqual(len(courses), 1)
        self.assertEqual((courses[0].name, courses[0].score), ("Optics", "81"))

    def test_empty_frame_removes_everything(self) -> None:
        t = one_semester()
        empty = pd.DataFrame(columns=["Id", "Course", "Score"])
        t2 = apply_major_courses_frame(t, "s1", empty)
        self.assertEqual(t2.semesters[0].major_courses, ())

    def test_missing_columns_raise(self) -> None:
        with self.assertRaises(ValueError):
            apply_major_courses_frame(one_semester(), "s1", pd.DataFrame([{"Course": "X"}]))


class TestDisplayFrames(unittest.TestCase):
    def test_course_rows_frame(self) -> None:
        t = update_language_score(one_semester(), "s1", "english", "120")
        df = course_rows_frame(derive_semester_view(t.semesters[0]))

        self.assertEqual(list(df["Course"]), ["English", "German", "Analysis", "Physics", "Chinese culture 1"])
        self.assertEqual(list(df["Invalid"]), [True, False, False, False, False])
        self.assertEqual(df.loc[2, "German grade"], "3.25")
        self.assertEqual(df.loc[2, "Evaluation"], "Satisfactory")
        self.assertEqual(df.loc[3, "German grade"], "—")

    def test_semester_summary_frame(self) -> None:
        df = semester_summary_frame(summarize(one_semester()))
        self.assertEqual(list(df["Semester"]), ["Semester 1", "Overall"])
        self.assertEqual(list(df["Courses"]), [1, 1])
        self.assertEqual(df.loc[1, "Credits"], "5.0")
        self.assertEqual(df.loc[1, "Weighted score"], "70.00")
        self.assertEqual(df.loc[1, "Weighted German grade"], "3.25")

    def test_semester_summary_frame_rounds_for_display(self) -> None:
        t = update_language_score(one_semester(), "s1", "english", "90")
        df = semester_summary_frame(summarize(t))
        # (90 * 2.5 + 70 * 5) / 7.5
        self.assertEqual(df.loc[0, "Weighted score"], "76.67")

    def test_semester_summary_frame_empty_semester(self) -> None:
        t = Transcript(semesters=(create_semester(semester_id="s1"),))
        df = semester_summary_frame(summarize(t))
        self.assertEqual(df.loc[0, "Weighted score"], "—")
        self.assertEqual(df.loc[0, "Credits"], "0.0")

    def test_evaluation_reference_frame(self) -> None:
        df = evaluation_reference_frame()
        self.assertEqual(list(df["Score"]), ["93 - 100", "80 - 92", "67 - 79", "60 - 66", "< 60"])
        self.assertEqual(list(df["German grade"]), [1, 2, 3, 4, 5])


if __name__ == "__main__":
    unittest.main()
