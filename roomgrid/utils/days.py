from typing import FrozenSet, List, Tuple

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DAY_LABELS = {
    SUNDAY: "Sunday",
    MONDAY: "Monday",
    TUESDAY: "Tuesday",
    WEDNESDAY: "Wednesday",
    THURSDAY: "Thursday",
    FRIDAY: "Friday",
    SATURDAY: "Saturday",
}

# display order for every day-keyed output
ORDERED_DAYS: List[int] = [MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY]

# longest tokens first; "SS" is the weekend pair shorthand
DAY_TOKENS: List[Tuple[str, FrozenSet[int]]] = [
    ("SAT", frozenset({SATURDAY})),
    ("SUN", frozenset({SUNDAY})),
    ("SS", frozenset({SATURDAY, SUNDAY})),
    ("TH", frozenset({THURSDAY})),
    ("M", frozenset({MONDAY})),
    ("T", frozenset({TUESDAY})),
    ("W", frozenset({WEDNESDAY})),
    ("F", frozenset({FRIDAY})),
    ("S", frozenset({SATURDAY})),
]


def expand_days(raw) -> FrozenSet[int]:
    """
    "MWF" -> {1,3,5}, "TTH" -> {2,4}, "SS" -> {6,0}
    """
    text = "".join(str(raw or "").upper().split())
    days = set()
    i = 0
    while i < len(text):
        for token, values in DAY_TOKENS:
            if text.startswith(token, i):
                days |= values
                i += len(token)
                break
        else:
            # unknown character
            i += 1
    return frozenset(days)


def day_label(weekday: int) -> str:
    return DAY_LABELS[weekday]
