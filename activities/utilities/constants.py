from typing import Final

DAYS: Final[list[str]] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
SLOTS: Final[list[str]] = ["Midday", "Afternoon"]
PERIODS: Final[list[str]] = ["month", "term"]

# Ordered grade scale: Infantil I3..I5, Primary 1st..6th
GRADE_ORDER: Final[dict[str, int]] = {
    "I3": -2, "I4": -1, "I5": 0,
    "1st": 1, "2nd": 2, "3rd": 3, "4th": 4, "5th": 5, "6th": 6,
}
GRADES: Final[list[str]] = list(GRADE_ORDER)
DEFAULT_GRADE: Final[str] = "1st"
DEFAULT_KID_COLOR: Final[str] = "#22c55e"

# Used for conflict detection when an activity has no explicit time
SLOT_FALLBACK_RANGES: Final[dict[str, str]] = {
    "Midday": "12:30–14:40",
    "Afternoon": "16:30–18:00",
}

MONTHS_PER_TERM: Final[int] = 3

# Bundle key -> per-term price by number of selections (last tier is the cap)
PSYCHOMOTRICITY_BUNDLE: Final[str] = "psychomotricity"
BUNDLE_TARIFFS: Final[dict[str, list[float]]] = {
    PSYCHOMOTRICITY_BUNDLE: [75, 135],
}

EXPORT_FILENAME_FORMAT: Final[str] = "activities-plan-{date}.json"
