"""
Rule-based trip-detail extractor for free-text vacation requests.

Every field has its own recognizer and all of them scan the same text.
Location, guests, dates, budget and property type are first-match-wins over
the ordered tables in ``vocab``; amenities accumulate every matching tag.
"""

import logging
import re
import time
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from app.core.nlp.vocab import (
    AMENITY_KEYWORDS,
    BUDGET_PATTERNS,
    DATE_PATTERNS,
    GUEST_PATTERNS,
    LOCATIONS,
    MONTHS,
    ORDINAL_SUFFIX,
    PROPERTY_TYPES,
    REGION_SUFFIX,
)

# Configure logging
logger = logging.getLogger(__name__)


class ExtractedDetails(BaseModel):
    """Partial trip record; every field is optional"""

    model_config = ConfigDict(populate_by_name=True)

    location: Optional[str] = None
    checkin: Optional[str] = None
    checkout: Optional[str] = None
    guests: Optional[int] = Field(default=None, gt=0)
    budget: Optional[int] = Field(default=None, gt=0)
    property_type: Optional[str] = Field(default=None, alias="propertyType")
    amenities: List[str] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain map with wire names; absent fields and empty amenities are omitted"""
        data = self.model_dump(by_alias=True, exclude_none=True)
        if not data.get("amenities"):
            data.pop("amenities", None)
        return data

    def fields_found(self) -> List[str]:
        return list(self.to_dict().keys())


class ExtractionResult(BaseModel):
    details: ExtractedDetails = Field(default_factory=ExtractedDetails)
    warnings: List[str] = Field(default_factory=list)


def _first_positive_int(text: str, patterns: List[Tuple[str, re.Pattern]], field: str) -> Optional[int]:
    """Walk an ordered pattern list and return the first positive capture"""
    for name, pattern in patterns:
        for match in pattern.finditer(text):
            try:
                value = int(match.group(1).replace(",", ""))
            except ValueError:
                # past the interpreter's digit limit for int conversion
                logger.warning(f"Ignoring oversized {field} number from '{name}' pattern")
                continue
            if value > 0:
                logger.debug(f"{field} matched by '{name}' pattern: {value}")
                return value
    return None


def extract_location(text: str) -> Optional[str]:
    lowered = text.lower()
    found = next((loc for loc in LOCATIONS if loc in lowered), None)
    if found is None:
        return None
    return found.capitalize() + REGION_SUFFIX


def extract_guests(text: str) -> Optional[int]:
    """Guest count: 'guests: N' > 'N people' > 'for N' > 'N pax'"""
    return _first_positive_int(text, GUEST_PATTERNS, "guests")


def extract_budget(text: str) -> Optional[int]:
    """Budget: 'budget: $N' > '$N/night' > 'around $N' > 'up to $N'"""
    return _first_positive_int(text, BUDGET_PATTERNS, "budget")


def extract_property_type(text: str) -> Optional[str]:
    lowered = text.lower()
    return next((kind for kind in PROPERTY_TYPES if kind in lowered), None)


def extract_amenities(text: str) -> List[str]:
    lowered = text.lower()
    return [
        tag for tag, keywords in AMENITY_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    ]


def _month_index(token: str) -> int:
    return MONTHS[token[:3].lower()]


def extract_date_range(text: str, today: Optional[date] = None) -> Tuple[Optional[str], Optional[str], List[str]]:
    """
    Find a check-in/check-out pair using the first date family that matches.

    Returns ISO strings for both dates or neither, plus any warnings. An
    impossible calendar date (e.g. Feb 30) is reported in the warnings and
    leaves both dates unset; later families are not consulted.
    """
    today = today or date.today()
    warnings: List[str] = []
    scan = ORDINAL_SUFFIX.sub(r"\1", text)

    for family, pattern in DATE_PATTERNS:
        match = pattern.search(scan)
        if not match:
            continue

        groups = match.groupdict()
        try:
            if family == "numeric":
                start_month = int(groups["m1"]) - 1
                end_month = int(groups["m2"]) - 1
            else:
                start_month = _month_index(groups["m1"])
                end_month = _month_index(groups["m2"]) if groups.get("m2") else start_month

            start_year = int(groups["y1"]) if groups.get("y1") else today.year
            end_year = int(groups["y2"]) if groups.get("y2") else start_year

            checkin = date(start_year, start_month + 1, int(groups["d1"]))
            checkout = date(end_year, end_month + 1, int(groups["d2"]))
        except ValueError as e:
            message = f"Invalid date in {family} range '{match.group(0)}': {e}"
            logger.warning(message)
            warnings.append(message)
            return None, None, warnings

        logger.debug(f"Dates matched by '{family}' pattern: {checkin} to {checkout}")
        return checkin.isoformat(), checkout.isoformat(), warnings

    return None, None, warnings


def extract_with_warnings(text: str, *, today: Optional[date] = None) -> ExtractionResult:
    """Run every recognizer over ``text`` and collect recovered diagnostics"""
    start_time = time.time()

    if not isinstance(text, str) or not text.strip():
        return ExtractionResult()

    try:
        checkin, checkout, warnings = extract_date_range(text, today)
        details = ExtractedDetails(
            location=extract_location(text),
            guests=extract_guests(text),
            checkin=checkin,
            checkout=checkout,
            budget=extract_budget(text),
            property_type=extract_property_type(text),
            amenities=extract_amenities(text),
        )
    except Exception as e:
        logger.error(f"Error extracting trip details: {e}")
        return ExtractionResult(warnings=[f"Extraction error: {e}"])

    elapsed_ms = (time.time() - start_time) * 1000
    logger.debug(f"Extracted {len(details.fields_found())} fields in {elapsed_ms:.2f}ms")
    return ExtractionResult(details=details, warnings=warnings)


def extract(text: str, *, today: Optional[date] = None) -> ExtractedDetails:
    """Pure text -> ExtractedDetails; never raises"""
    return extract_with_warnings(text, today=today).details
