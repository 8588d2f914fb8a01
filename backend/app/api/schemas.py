from typing import List, Dict, Any
from pydantic import BaseModel, Field, field_validator

from app.core.monitor import MonitorRequest
from app.core.settings import Settings

settings = Settings()

# ===== EXTRACTION SCHEMAS =====

class ExtractRequest(BaseModel):
    text: str = Field(..., description="Free-text description of the desired stay")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Trip description cannot be empty")
        max_length = settings.MAX_REQUEST_LENGTH
        if len(v) > max_length:
            raise ValueError(f"Trip description too long (max {max_length} characters)")
        # Check for potentially malicious content
        suspicious_patterns = ['<script>', 'javascript:', 'data:text/html']
        if any(pattern in v.lower() for pattern in suspicious_patterns):
            raise ValueError("Trip description contains invalid content")
        return v.strip()

class ExtractResponse(BaseModel):
    """Response model for trip-detail extraction"""
    original_text: str
    extracted: Dict[str, Any]
    fields_found: List[str]
    warnings: List[str] = []
    processing_time: float

# ===== BATCH SCHEMAS =====

class BatchItemResult(BaseModel):
    index: int
    original_text: str
    extracted: Dict[str, Any]
    warnings: List[str] = []
    processing_time: float = 0.0
    status: str  # "matched" or "empty"

class BatchSummary(BaseModel):
    total_requests: int
    matched: int
    empty: int
    total_processing_time: float

class BatchExtractResponse(BaseModel):
    results: List[BatchItemResult]
    summary: BatchSummary

# ===== MONITOR SCHEMAS =====

class MonitorPayloadResponse(BaseModel):
    extracted: Dict[str, Any]
    monitor_request: MonitorRequest
    defaults_applied: List[str]
    warnings: List[str] = []
