import re
from typing import Optional

ZIPCODE_RE = re.compile(r"[0-9]{5}")
NON_DIGIT_RE = re.compile(r"[^0-9]")

POPULAR_ZIPCODES = ("77024", "77005", "77008", "77019", "77098")

FEATURED_NEIGHBORHOODS = (
    {"zip": "77024", "name": "Memorial", "desc": "234 events this month"},
    {"zip": "77005", "name": "Museum District", "desc": "189 events this month"},
    {"zip": "77008", "name": "Heights", "desc": "312 events this month"},
    {"zip": "77019", "name": "River Oaks", "desc": "156 events this month"},
    {"zip": "77098", "name": "Upper Kirby", "desc": "203 events this month"},
    {"zip": "77007", "name": "East Downtown", "desc": "178 events this month"},
)

def sanitize_zip_input(raw: Optional[str]) -> str:
    """Keeps only digits and truncates to the 5 characters a ZIP can hold."""
    if not raw:
        return ""
    return NON_DIGIT_RE.sub("", raw)[:5]

def is_valid_zipcode(value) -> bool:
    return isinstance(value, str) and ZIPCODE_RE.fullmatch(value) is not None

def zip_path(zipcode: str) -> str:
    return f"/zip/{zipcode}"
