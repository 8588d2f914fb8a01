from fastapi import APIRouter, HTTPException, Request
import time
from contextlib import asynccontextmanager
from typing import Dict, List
from slowapi import Limiter
from slowapi.util import get_remote_address
import structlog

from app.api.schemas import (
    BatchExtractResponse,
    BatchItemResult,
    BatchSummary,
    ExtractRequest,
    ExtractResponse,
    MonitorPayloadResponse,
)
from app.core.monitor import build_monitor_request
from app.core.nlp.extractor import ExtractionResult, extract_with_warnings
from app.core.settings import Settings

logger = structlog.get_logger(__name__)

settings = Settings()

router = APIRouter(prefix="/nlp", tags=["NLP"])

limiter = Limiter(key_func=get_remote_address, enabled=settings.ENABLE_RATE_LIMITING)

HEALTH_CHECK_TEXT = "Villa in Poipu for 4 guests, March 15 to 22, budget: $400, pool"

SAMPLE_REQUESTS: List[Dict[str, str]] = [
    {
        "description": "Beachfront villa with a per-night budget",
        "text": "I'm looking for a beachfront villa in Poipu for 4 people from March 15-22, with a pool and kitchen, budget around $400/night",
    },
    {
        "description": "Holiday stay across the new year",
        "text": "Condo in Princeville, Dec 27th, 2025 through Jan 3rd, 2026, 2 adults, wifi and parking, up to $250",
    },
    {
        "description": "Labelled fields",
        "text": "Location: Hanalei. Dates: Jun 10 to Jun 17. Guests: 6. Budget: $600. House with hot tub and balcony",
    },
    {
        "description": "Numeric dates",
        "text": "Resort near Lihue 7/4/2026 - 7/11/2026 for 3, gym and internet",
    },
]


@asynccontextmanager
async def performance_timer(operation: str):
    """Context manager for timing operations"""
    start = time.time()
    try:
        yield
    finally:
        duration = time.time() - start
        logger.info("operation_completed", operation=operation, duration_seconds=round(duration, 4))


def run_extraction(text: str) -> ExtractionResult:
    result = extract_with_warnings(text)
    fields = result.details.fields_found()
    logger.info(
        "trip_details_extracted",
        text_length=len(text),
        fields_found=fields,
        has_dates="checkin" in fields,
        warning_count=len(result.warnings)
    )
    if result.warnings:
        logger.warning("trip_details_recovered", warnings=result.warnings)
    return result


@router.post("/extract",
    response_model=ExtractResponse,
    responses={
        200: {"description": "Extracted whatever trip details the text contains"},
        422: {"description": "Invalid input"},
        429: {"description": "Rate limit exceeded"},
    },
    summary="Extract trip details",
    description="Recover location, dates, guests, budget, property type and amenities from free text"
)
@limiter.limit(settings.RATE_LIMIT_EXTRACT)
async def extract_endpoint(request: Request, extract_req: ExtractRequest):
    async with performance_timer("trip_extraction"):
        try:
            start_time = time.time()
            result = run_extraction(extract_req.text)
            processing_time = time.time() - start_time

            return ExtractResponse(
                original_text=extract_req.text,
                extracted=result.details.to_dict(),
                fields_found=result.details.fields_found(),
                warnings=result.warnings,
                processing_time=processing_time,
            )
        except Exception as e:
            logger.error("trip_extraction_endpoint_error", error=str(e), error_type=type(e).__name__)
            raise HTTPException(status_code=500, detail="Failed to extract trip details")


@router.post("/extract-batch", response_model=BatchExtractResponse)
@limiter.limit(settings.RATE_LIMIT_BATCH)
async def extract_batch_endpoint(request: Request, extract_reqs: List[ExtractRequest]):
    """Extract trip details from several descriptions in one call"""
    if len(extract_reqs) > settings.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Too many requests (max {settings.MAX_BATCH_SIZE})"
        )

    async with performance_timer("batch_trip_extraction"):
        results = []
        total_time = 0.0

        for i, req in enumerate(extract_reqs):
            start_time = time.time()
            result = run_extraction(req.text)
            processing_time = time.time() - start_time
            total_time += processing_time

            extracted = result.details.to_dict()
            results.append(BatchItemResult(
                index=i,
                original_text=req.text,
                extracted=extracted,
                warnings=result.warnings,
                processing_time=processing_time,
                status="matched" if extracted else "empty",
            ))

        matched = len([r for r in results if r.status == "matched"])
        logger.info(
            "batch_extraction_completed",
            total_requests=len(extract_reqs),
            matched=matched,
            total_processing_time=round(total_time, 4)
        )

        return BatchExtractResponse(
            results=results,
            summary=BatchSummary(
                total_requests=len(extract_reqs),
                matched=matched,
                empty=len(results) - matched,
                total_processing_time=total_time,
            ),
        )


@router.post("/monitor-request", response_model=MonitorPayloadResponse)
@limiter.limit(settings.RATE_LIMIT_EXTRACT)
async def monitor_request_endpoint(request: Request, extract_req: ExtractRequest):
    """Extract details and build the payload for starting a monitor"""
    result = run_extraction(extract_req.text)
    details = result.details

    defaults_applied = []
    if details.location is None:
        defaults_applied.append("location")
    if details.guests is None:
        defaults_applied.append("guests")

    monitor_request = build_monitor_request(details, settings)
    logger.info("monitor_request_built", location=monitor_request.location, defaults_applied=defaults_applied)

    return MonitorPayloadResponse(
        extracted=details.to_dict(),
        monitor_request=monitor_request,
        defaults_applied=defaults_applied,
        warnings=result.warnings,
    )


@router.get("/samples")
async def get_sample_requests():
    """Sample trip descriptions for the search form"""
    logger.info("nlp_samples_returned", sample_count=len(SAMPLE_REQUESTS))
    return {
        "samples": SAMPLE_REQUESTS,
        "count": len(SAMPLE_REQUESTS),
    }


@router.get("/health")
async def health_check():
    """Check the extractor still recovers every field from a known sample"""
    result = extract_with_warnings(HEALTH_CHECK_TEXT)
    fields = result.details.fields_found()
    expected = ["location", "checkin", "checkout", "guests", "budget", "propertyType", "amenities"]
    missing = [field for field in expected if field not in fields]

    if missing:
        logger.error("nlp_health_check_degraded", missing_fields=missing)
        return {"status": "degraded", "service": "Trip extractor", "missing_fields": missing}

    return {"status": "healthy", "service": "Trip extractor", "fields_found": fields}
