import re
from typing import Iterable, List

_SEPARATOR_RE = re.compile(r"\s*(?:[&+,/]|\bAND\b)\s*", re.IGNORECASE)
_INVALID_CHARS_RE = re.compile(r"[^A-Z0-9-]")
_DIGITS_RE = re.compile(r"(\d+)")

NO_ROOM_VALUES = {"", "NA"}

# (room, follows) pairs applied after sorting
PINNED_ROOMS = [("SR", "IR")]


def split_rooms(raw) -> List[str]:
    """
    "201 & 202" -> ["201", "202"], "101/102,103" -> ["101", "102", "103"], "NA" -> []
    """
    value = str(raw or "").strip().upper()
    if value in NO_ROOM_VALUES:
        return []
    out = []
    for piece in _SEPARATOR_RE.split(value):
        piece = _INVALID_CHARS_RE.sub("", piece.strip())
        if piece:
            out.append(piece)
    return out


def room_sort_key(room: str):
    # digit runs compare numerically: "A9" < "A10"
    key = []
    for chunk in _DIGITS_RE.split(room.upper()):
        if not chunk:
            continue
        key.append((0, int(chunk), "") if chunk.isdigit() else (1, 0, chunk))
    # raw text breaks ties such as "12" vs "012"
    return key, room


def order_rooms(rooms: Iterable[str]) -> List[str]:
    """
    {"IR", "101", "SR", "102"} -> ["101", "102", "IR", "SR"]
    """
    ordered = sorted(set(rooms), key=room_sort_key)
    for room, follows in PINNED_ROOMS:
        if room not in ordered:
            continue
        ordered.remove(room)
        if follows in ordered:
            ordered.insert(ordered.index(follows) + 1, room)
        else:
            ordered.append(room)
    return ordered
