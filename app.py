import streamlit as st

from biuh_gpa.backend_logic import format_number
from biuh_gpa.catalog import DEFAULT_CATALOG
from biuh_gpa.config import CREDIT_LANGUAGE, CREDIT_MAJOR, NMAX, NMIN, configure_logging
from biuh_gpa.tables import (
    apply_major_courses_frame,
    course_rows_frame,
    evaluation_reference_frame,
    major_courses_frame,
    semester_summary_frame,
)
from biuh_gpa.transcript import (
    active_index,
    add_major_course,
    add_semester,
    new_transcript,
    semester_label,
    set_active_semester,
    summarize,
    update_culture_course,
    update_language_score,
)

configure_logging()

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="BiUH GPA Calculator | Weighted Score & German Grade",
    page_icon="🎓",
    layout="wide",
)

if "transcript" not in st.session_state:
    st.session_state["transcript"] = new_transcript(DEFAULT_CATALOG)
if "editor_version" not in st.session_state:
    st.session_state["editor_version"] = 0

transcript = st.session_state["transcript"]
summary = summarize(transcript, DEFAULT_CATALOG)
overall = summary.overall

st.title("🎓 BiUH GPA Calculator")
st.write(
    "Credit-weighted averages per semester and for the whole programme, with every "
    "percentage score converted to the German 1-5 scale. Nothing you enter is stored."
)

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Courses entered", overall.count)
with col2:
    st.metric("Total credits", format_number(overall.total_credits, 1))
with col3:
    st.metric("Overall German grade", format_number(overall.weighted_secondary, 2))

# ------------------------
# Semester picker
# ------------------------

st.markdown("---")
st.subheader("Semesters")

n_semesters = len(transcript.semesters)
current = active_index(transcript)
picked = st.radio(
    "Semester",
    options=list(range(n_semesters)),
    index=current,
    format_func=semester_label,
    horizontal=True,
    key=f"semester_picker_{n_semesters}",
)
if picked != current:
    transcript = set_active_semester(transcript, transcript.semesters[picked].id)
    st.session_state["transcript"] = transcript
    current = picked

if st.button("+ Add semester", key="add_semester"):
    st.session_state["transcript"] = add_semester(transcript, DEFAULT_CATALOG)
    st.rerun()

semester = transcript.semesters[current]
view = summary.semesters[current]
label = semester_label(current)

# ------------------------
# Input form for the active semester
# ------------------------

with st.form(f"semester_form_{semester.id}"):
    st.subheader(f"{label}: language courses")
    st.caption(f"English and German, {CREDIT_LANGUAGE:g} credits each")
    lang1, lang2 = st.columns(2)
    with lang1:
        english = st.text_input("English (0-100)", value=semester.english, key=f"english_{semester.id}")
    with lang2:
        german = st.text_input("German (0-100)", value=semester.german, key=f"german_{semester.id}")

    st.subheader(f"{label}: major courses")
    st.caption(f"Add as many as you need; each major course is worth {CREDIT_MAJOR:g} credits")
    majors_df = st.data_editor(
        major_courses_frame(transcript, semester.id),
        key=f"majors_{semester.id}_{st.session_state['editor_version']}",
        num_rows="dynamic",
        width="stretch",
        column_order=("Course", "Score"),
        column_config={
            "Course": st.column_config.TextColumn("Course"),
            "Score": st.column_config.TextColumn("Score (0-100)"),
        },
    )

    st.subheader(f"{label}: Chinese culture course")
    st.caption("One course per semester; credits follow the course")
    keys = list(DEFAULT_CATALOG.keys())
    culture_key = st.selectbox(
        "Course",
        keys,
        index=keys.index(view.culture_key),
        format_func=lambda k: f"{DEFAULT_CATALOG.resolve(k).label} ({DEFAULT_CATALOG.resolve(k).credit:g} credits)",
        key=f"culture_key_{semester.id}",
    )
    culture_score = st.text_input(
        "Culture course score (0-100)", value=semester.culture.score, key=f"culture_score_{semester.id}"
    )

    submitted = st.form_submit_button("Save semester", type="primary", key="save_semester")


if submitted:
    updated = update_language_score(transcript, semester.id, "english", english)
    updated = update_language_score(updated, semester.id, "german", german)
    updated = apply_major_courses_frame(updated, semester.id, majors_df)
    updated = update_culture_course(updated, semester.id, course_key=culture_key, score=culture_score)

    # keep at least one row to type into
    edited = next(s for s in updated.semesters if s.id == semester.id)
    if not edited.major_courses:
        updated = add_major_course(updated, semester.id)

    st.session_state["transcript"] = updated
    st.session_state["editor_version"] += 1
    st.rerun()


# ------------------------
# Results
# ------------------------

st.markdown("---")
st.subheader(f"{label} courses")

rows_df = course_rows_frame(view)
if rows_df["Invalid"].any():
    st.warning("Some scores are outside 0-100. They are shown here but not counted.")
st.dataframe(rows_df, width="stretch", hide_index=True)

st.subheader(f"{label} GPA")
s1, s2, s3 = st.columns(3)
with s1:
    st.metric("Weighted score", format_number(view.totals.weighted_score, 2))
with s2:
    st.metric("Weighted German grade", format_number(view.totals.weighted_secondary, 2))
with s3:
    st.metric("Credits", format_number(view.totals.total_credits, 1))

st.markdown("---")
st.subheader("Overall GPA (whole programme)")
c1, c2, c3, c4, c5 = st.columns(5)
with c1:
    st.metric("Weighted score", format_number(overall.weighted_score, 2))
with c2:
    st.metric("Weighted German grade", format_number(overall.weighted_secondary, 2))
with c3:
    st.metric("Total credits", format_number(overall.total_credits, 1))
with c4:
    st.metric("GPA (4.0 scale)", format_number(summary.gpa_on_scale4, 2))
with c5:
    st.metric("GPA (5.0 scale)", format_number(summary.gpa_on_scale5, 2))

st.caption("Missing or invalid scores are left out of every average.")
st.dataframe(semester_summary_frame(summary), width="stretch", hide_index=True)


st.header("How is the German grade calculated?")
st.write(f"X = 1 + 3 × ((Nmax − Nd) / (Nmax − Nmin)), with Nmax = {NMAX:g}, Nmin = {NMIN:g} and Nd your score.")
st.write(f"Results are kept between 1 and 4; any score below {NMIN:g} is a 5.")
st.dataframe(evaluation_reference_frame(), width="stretch", hide_index=True)
