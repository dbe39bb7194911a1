import re
from typing import Optional

_RANGE = re.compile(r"^(\d+)\s*-\s*(\d+)$")
_SINGLE = re.compile(r"^\d+$")


def parse_germination_time(germination_time: Optional[str]) -> Optional[int]:
    """
    Germination time text to whole days.

        "5-15 dagar" -> 10   (midpoint, rounded half up)
        "10 dagar"   -> 10
        "ca 10"      -> None
    """
    if not germination_time or not germination_time.strip():
        return None

    text = germination_time.strip()
    if text.lower().endswith("dagar"):
        text = text[: -len("dagar")].strip()

    match = _RANGE.match(text)
    if match:
        low, high = int(match.group(1)), int(match.group(2))
        if 0 < low <= high:
            return (low + high + 1) // 2
        return None

    if _SINGLE.match(text):
        value = int(text)
        return value if value > 0 else None
    return None
