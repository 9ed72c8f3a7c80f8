"""
Chinese culture course catalog.

Each semester picks exactly one culture course; its credit comes from the
catalog, not from user input. The catalog is an immutable table that is
passed to whatever builds course records, so tests can swap in their own.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CultureCourseOption:
    key: str
    label: str
    credit: float


class CourseCatalog:
    """
    Ordered, read-only registry of culture course options.

    The first option doubles as the default selection and as the fallback
    for keys the catalog does not know.
    """

    def __init__(self, options: Iterable[CultureCourseOption]):
        options = tuple(options)
        if not options:
            raise ValueError("A course catalog needs at least one option.")

        by_key: Dict[str, CultureCourseOption] = {}
        for option in options:
            if option.key in by_key:
                raise ValueError(f"Duplicate catalog key: {option.key!r}")
            if not option.credit or option.credit <= 0:
                raise ValueError(f"Catalog credit must be positive (got {option.credit} for {option.key!r})")
            by_key[option.key] = option

        self._options: Tuple[CultureCourseOption, ...] = options
        self._by_key = by_key

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self):
        return iter(self._options)

    def __contains__(self, key) -> bool:
        return key in self._by_key

    @property
    def default(self) -> CultureCourseOption:
        return self._options[0]

    def keys(self) -> Tuple[str, ...]:
        return tuple(o.key for o in self._options)

    def get(self, key) -> Optional[CultureCourseOption]:
        return self._by_key.get(key)

    def resolve(self, key) -> CultureCourseOption:
        option = self._by_key.get(key)
        if option is None:
            logger.debug("Unknown culture course key %r, falling back to %r", key, self.default.key)
            return self.default
        return option


DEFAULT_CATALOG = CourseCatalog(
    [
        CultureCourseOption("cc-1", "Chinese culture 1", 3),
        CultureCourseOption("cc-2", "Chinese culture 2", 3),
        CultureCourseOption("cc-3-1", "Chinese culture 3-1", 2),
        CultureCourseOption("cc-3-2", "Chinese culture 3-2", 2),
        CultureCourseOption("cc-3-3", "Chinese culture 3-3", 1),
        CultureCourseOption("cc-4-1", "Chinese culture 4-1", 2.5),
        CultureCourseOption("cc-4-2", "Chinese culture 4-2", 2.5),
    ]
)
