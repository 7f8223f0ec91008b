from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from core.models import DEFAULT_SCRIPT, SCRIPTS, QuoteFilter, RunicScript

ErrorCode = Literal[
    "INVALID_REQUEST",
    "QUOTE_NOT_FOUND",
    "QUOTE_NOT_EDITABLE",
    "JOB_NOT_FOUND",
    "INTERNAL_ERROR",
]
JobState = Literal["queued", "processing", "completed", "failed"]


class ScriptInfo(BaseModel):
    id: RunicScript
    name: str
    is_default: bool


class TransliterateRequest(BaseModel):
    text: str = Field(max_length=10000)
    script: RunicScript | None = None


class TransliterateResponse(BaseModel):
    text: str
    script: RunicScript
    result: str


class PreviewRequest(BaseModel):
    text: str = Field(max_length=10000)


class PreviewResponse(BaseModel):
    text: str
    previews: dict[RunicScript, str]


class NormalizeRequest(BaseModel):
    text: str = Field(max_length=10000)


class NormalizeResponse(BaseModel):
    text: str
    result: str
    changed: bool


class Preferences(BaseModel):
    selected_script: RunicScript = DEFAULT_SCRIPT
    show_transliteration: bool = True
    quote_list_filter: QuoteFilter = "all"


class PreferencesUpdate(BaseModel):
    selected_script: RunicScript | None = None
    show_transliteration: bool | None = None
    quote_list_filter: QuoteFilter | None = None


class QuoteCreate(BaseModel):
    text_latin: str = Field(min_length=1, max_length=2000)
    author: str = Field(min_length=1, max_length=200)


class FavoriteUpdate(BaseModel):
    is_favorite: bool


class QuoteOut(BaseModel):
    id: int
    text_latin: str
    author: str
    script: RunicScript
    runic_text: str
    runic_elder: str | None = None
    runic_younger: str | None = None
    runic_cirth: str | None = None
    is_user_created: bool
    is_favorite: bool
    created_at: int


class BackfillCreate(BaseModel):
    scripts: list[RunicScript] = Field(
        default_factory=lambda: list(SCRIPTS), min_length=1
    )
    normalize_legacy: bool = True


class JobResponse(BaseModel):
    job_id: str
    status: JobState
    created_at: datetime


class JobStatus(BaseModel):
    job_id: str
    status: JobState
    progress: int
    message: str | None = None
    updated: int = 0
    created_at: datetime
    updated_at: datetime
    error: str | None = None


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    redis: bool
    scripts: int
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
    code: ErrorCode
    details: dict[str, object] | None = None
    timestamp: datetime
