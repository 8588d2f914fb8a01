"""
Lookup tables and ordered pattern lists for trip-detail extraction.

Order matters everywhere in this module: the first entry that matches wins,
except for AMENITY_KEYWORDS where every matching tag is kept (in table order).
"""

import re
from typing import Dict, List, Tuple

# Substring matched, so a short name nested in a longer word can trigger.
# "kauai" is listed first, which means "Hanalei, Kauai" resolves to Kauai.
LOCATIONS: List[str] = ["kauai", "hanalei", "princeville", "poipu", "kapaa", "lihue"]
REGION_SUFFIX = ", Kauai"

PROPERTY_TYPES: List[str] = ["villa", "condo", "house", "hotel", "resort", "apartment", "bungalow"]

AMENITY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "pool": ("pool", "swimming"),
    "beach_access": ("beach", "oceanfront", "beachfront"),
    "wifi": ("wifi", "internet"),
    "kitchen": ("kitchen", "kitchenette"),
    "parking": ("parking", "garage"),
    "hot_tub": ("hot tub", "jacuzzi", "spa"),
    "gym": ("gym", "fitness"),
    "balcony": ("balcony", "terrace", "patio"),
}

# Zero-based, keyed by the three-letter prefix of the month name
MONTHS: Dict[str, int] = {
    "jan": 0, "feb": 1, "mar": 2, "apr": 3, "may": 4, "jun": 5,
    "jul": 6, "aug": 7, "sep": 8, "oct": 9, "nov": 10, "dec": 11,
}

GUEST_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("labelled", re.compile(r"guests?\s*:\s*(\d+)", re.IGNORECASE)),
    ("counted", re.compile(r"(\d+)\s*(?:guests?|people|adults?)\b", re.IGNORECASE)),
    ("for_n", re.compile(r"\bfor\s+(\d+)\b", re.IGNORECASE)),
    ("pax", re.compile(r"(\d+)\s*pax\b", re.IGNORECASE)),
]

_AMOUNT = r"(\d+(?:,\d{3})*)"

BUDGET_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("labelled", re.compile(r"budget\s*:?\s*\$?\s*" + _AMOUNT, re.IGNORECASE)),
    ("per_night", re.compile(r"\$\s*" + _AMOUNT + r"(?:\s*/\s*(?:night|day))?", re.IGNORECASE)),
    ("around", re.compile(r"around\s+\$\s*" + _AMOUNT, re.IGNORECASE)),
    ("up_to", re.compile(r"up\s+to\s+\$\s*" + _AMOUNT, re.IGNORECASE)),
]

ORDINAL_SUFFIX = re.compile(r"(\d+)(?:st|nd|rd|th)\b", re.IGNORECASE)

_MONTH = (
    r"\b(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b\.?"
)
_SEP = r"\s*(?:-|–|to|through|thru|until)\s*"

# Each family captures named groups; a missing year group means "current year".
DATE_PATTERNS: List[Tuple[str, re.Pattern]] = [
    (
        "month_name_with_years",
        re.compile(
            rf"(?P<m1>{_MONTH})\s+(?P<d1>\d{{1,2}}),?\s+(?P<y1>\d{{4}}){_SEP}"
            rf"(?P<m2>{_MONTH})\s+(?P<d2>\d{{1,2}}),?\s+(?P<y2>\d{{4}})",
            re.IGNORECASE,
        ),
    ),
    (
        "month_name_day_span",
        re.compile(
            rf"(?P<m1>{_MONTH})\s+(?P<d1>\d{{1,2}}){_SEP}(?P<d2>\d{{1,2}})\b(?:,?\s+(?P<y1>\d{{4}}))?",
            re.IGNORECASE,
        ),
    ),
    (
        "numeric",
        re.compile(
            r"(?P<m1>\d{1,2})/(?P<d1>\d{1,2})/(?P<y1>\d{4})" + _SEP +
            r"(?P<m2>\d{1,2})/(?P<d2>\d{1,2})/(?P<y2>\d{4})",
        ),
    ),
    (
        "labelled_month_names",
        re.compile(
            rf"dates?\s*:\s*(?P<m1>{_MONTH})\s+(?P<d1>\d{{1,2}}){_SEP}(?P<m2>{_MONTH})\s+(?P<d2>\d{{1,2}})\b",
            re.IGNORECASE,
        ),
    ),
]
