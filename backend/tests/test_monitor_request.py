"""
Test monitor payload building and the settings it reads defaults from
"""

from app.core.monitor import MonitorRequest, build_monitor_request
from app.core.nlp.extractor import ExtractedDetails, extract
from app.core.settings import Settings


def test_defaults_for_missing_location_and_guests():
    payload = build_monitor_request(ExtractedDetails(), Settings())
    assert payload.model_dump(by_alias=True) == {
        "location": "Kauai, HI",
        "guests": 2,
        "checkIn": "",
        "checkOut": "",
        "budget": None,
        "propertyType": None,
        "amenities": None,
    }


def test_extracted_fields_pass_through():
    details = ExtractedDetails(
        location="Poipu, Kauai",
        checkin="2026-03-15",
        checkout="2026-03-22",
        guests=4,
        budget=400,
        property_type="villa",
        amenities=["pool", "kitchen"],
    )
    payload = build_monitor_request(details, Settings())
    assert payload.location == "Poipu, Kauai"
    assert payload.guests == 4
    assert payload.check_in == "2026-03-15"
    assert payload.check_out == "2026-03-22"
    assert payload.budget == 400
    assert payload.property_type == "villa"
    assert payload.amenities == ["pool", "kitchen"]


def test_configured_defaults():
    settings = Settings(DEFAULT_LOCATION="Princeville, HI", DEFAULT_GUESTS=5)
    payload = build_monitor_request(extract("condo with parking"), settings)
    assert payload.location == "Princeville, HI"
    assert payload.guests == 5
    assert payload.property_type == "condo"
    assert payload.amenities == ["parking"]


def test_monitor_request_accepts_wire_names():
    payload = MonitorRequest(location="Lihue, Kauai", guests=3, checkIn="2026-07-04", checkOut="2026-07-11")
    assert payload.check_in == "2026-07-04"
    assert payload.model_dump(by_alias=True)["checkOut"] == "2026-07-11"


def test_allowed_origins_from_comma_separated_string():
    settings = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test,")
    assert settings.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MAX_BATCH_SIZE", "3")
    monkeypatch.setenv("DEFAULT_GUESTS", "6")
    settings = Settings()
    assert settings.MAX_BATCH_SIZE == 3
    assert settings.DEFAULT_GUESTS == 6
