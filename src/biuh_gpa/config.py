import logging
import os

# ------------------------
# Grading constants
# ------------------------

# Bounds of the modified Bavarian formula
NMAX = 100.0
NMIN = 60.0

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Credit standard
CREDIT_LANGUAGE = 2.5
CREDIT_MAJOR = 5.0

CREDIT_STANDARD = {
    "language": CREDIT_LANGUAGE,
    "major": CREDIT_MAJOR,
}

# field name -> display name
LANGUAGE_COURSES = {
    "english": "English",
    "german": "German",
}

# (lower bound, tier, label), checked top to bottom
EVALUATION_BANDS = [
    (93.0, 1, "Very Good"),
    (80.0, 2, "Good"),
    (67.0, 3, "Satisfactory"),
    (60.0, 4, "Sufficient"),
]
FAILING_TIER = 5
FAILING_LABEL = "Insufficient"

# Target scales for the cumulative GPA
GPA_SCALES = (4, 5)


# ------------------------
# Logging
# ------------------------

LOG_LEVEL_ENV = "BIUH_GPA_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=None) -> None:
    """
    Set up root logging for the app. The library modules only create
    loggers; handlers are installed here.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
