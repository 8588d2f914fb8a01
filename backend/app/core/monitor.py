"""
Build the monitoring API payload from extracted trip details.

Nothing is sent from here; the payload is handed back to the caller, which
owns the request to the monitoring service.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.nlp.extractor import ExtractedDetails
from app.core.settings import Settings

logger = logging.getLogger(__name__)


class MonitorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location: str
    guests: int = Field(..., gt=0)
    check_in: str = Field(default="", alias="checkIn")
    check_out: str = Field(default="", alias="checkOut")
    budget: Optional[int] = None
    property_type: Optional[str] = Field(default=None, alias="propertyType")
    amenities: Optional[List[str]] = None


def build_monitor_request(details: ExtractedDetails, settings: Optional[Settings] = None) -> MonitorRequest:
    """Fill host defaults for location, guests and dates; pass the rest through"""
    settings = settings or Settings()

    if details.location is None:
        logger.info(f"No location extracted, defaulting monitor to {settings.DEFAULT_LOCATION}")

    return MonitorRequest(
        location=details.location or settings.DEFAULT_LOCATION,
        guests=details.guests or settings.DEFAULT_GUESTS,
        check_in=details.checkin or "",
        check_out=details.checkout or "",
        budget=details.budget,
        property_type=details.property_type,
        amenities=details.amenities or None,
    )
