from __future__ import annotations

from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Response
from fastapi.exceptions import RequestValidationError

from api.dependencies import (
    LoggerDep,
    RedisDep,
    get_job_service,
    get_preference_service,
    get_quote_service,
    get_settings,
)
from api.errors import (
    HealthStatusError,
    QuoteNotEditableError,
    QuoteNotFoundError,
    health_exception_handler,
    http_exception_handler,
    quote_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from api.health import compute_health
from api.logging import setup_logging
from api.models import (
    BackfillCreate,
    FavoriteUpdate,
    HealthResponse,
    JobResponse,
    JobStatus,
    NormalizeRequest,
    NormalizeResponse,
    Preferences,
    PreferencesUpdate,
    PreviewRequest,
    PreviewResponse,
    QuoteCreate,
    QuoteOut,
    ScriptInfo,
    TransliterateRequest,
    TransliterateResponse,
)
from api.services import JobService, PreferenceService, QuoteService
from core.cirth_compat import normalize_legacy_glyphs
from core.display import runic_text
from core.models import DEFAULT_SCRIPT, SCRIPTS, Quote, QuoteFilter, RunicScript
from core.translit import script_name, transliterate, transliterate_all

QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
PreferenceServiceDep = Annotated[PreferenceService, Depends(get_preference_service)]
JobServiceDep = Annotated[JobService, Depends(get_job_service)]
ScriptQuery = Annotated[RunicScript | None, Query()]


def _quote_out(quote: Quote, script: RunicScript) -> QuoteOut:
    return QuoteOut(
        id=quote.id,
        text_latin=quote.text_latin,
        author=quote.author,
        script=script,
        runic_text=runic_text(quote, script),
        runic_elder=quote.runic_elder,
        runic_younger=quote.runic_younger,
        runic_cirth=quote.runic_cirth,
        is_user_created=quote.is_user_created,
        is_favorite=quote.is_favorite,
        created_at=quote.created_at,
    )


def create_app() -> FastAPI:
    setup_logging(get_settings().log_level)
    app = FastAPI(title="Runic Quotes API", version="1.0.0")
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HealthStatusError, health_exception_handler)
    app.add_exception_handler(QuoteNotFoundError, quote_exception_handler)
    app.add_exception_handler(QuoteNotEditableError, quote_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/api/v1/health", response_model=HealthResponse)
    async def health(redis: RedisDep, logger: LoggerDep) -> HealthResponse:
        return compute_health(redis, logger)

    @app.get("/api/v1/scripts", response_model=list[ScriptInfo])
    async def list_scripts() -> list[ScriptInfo]:
        return [
            ScriptInfo(id=s, name=script_name(s), is_default=s == DEFAULT_SCRIPT)
            for s in SCRIPTS
        ]

    @app.post("/api/v1/transliterate", response_model=TransliterateResponse)
    async def transliterate_text(
        req: TransliterateRequest, prefs: PreferenceServiceDep
    ) -> TransliterateResponse:
        script = req.script or prefs.selected_script()
        return TransliterateResponse(
            text=req.text, script=script, result=transliterate(req.text, script)
        )

    @app.post("/api/v1/transliterate/preview", response_model=PreviewResponse)
    async def preview(req: PreviewRequest) -> PreviewResponse:
        return PreviewResponse(text=req.text, previews=transliterate_all(req.text))

    @app.post("/api/v1/normalize", response_model=NormalizeResponse)
    async def normalize(req: NormalizeRequest) -> NormalizeResponse:
        result = normalize_legacy_glyphs(req.text)
        return NormalizeResponse(
            text=req.text, result=result, changed=result != req.text
        )

    @app.get("/api/v1/preferences", response_model=Preferences)
    async def get_preferences(prefs: PreferenceServiceDep) -> Preferences:
        return prefs.get()

    @app.put("/api/v1/preferences", response_model=Preferences)
    async def update_preferences(
        changes: PreferencesUpdate, prefs: PreferenceServiceDep
    ) -> Preferences:
        return prefs.update(changes)

    @app.get("/api/v1/quotes", response_model=list[QuoteOut])
    async def list_quotes(
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
        quote_filter: Annotated[QuoteFilter | None, Query(alias="filter")] = None,
    ) -> list[QuoteOut]:
        quotes.seed_if_needed()
        current = prefs.get()
        chosen = script or current.selected_script
        selected = quotes.list_quotes(quote_filter or current.quote_list_filter)
        return [_quote_out(q, chosen) for q in selected]

    @app.post("/api/v1/quotes", response_model=QuoteOut, status_code=201)
    async def create_quote(
        body: QuoteCreate,
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        try:
            quote = quotes.save_user_quote(body.text_latin, body.author)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quote_out(quote, script or prefs.selected_script())

    @app.get("/api/v1/quotes/daily", response_model=QuoteOut)
    async def daily_quote(
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        quote = quotes.quote_of_the_day()
        if quote is None:
            raise HTTPException(status_code=404, detail="No quotes available")
        return _quote_out(quote, script or prefs.selected_script())

    @app.get("/api/v1/quotes/random", response_model=QuoteOut)
    async def random_quote(
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        quote = quotes.random_quote()
        if quote is None:
            raise HTTPException(status_code=404, detail="No quotes available")
        return _quote_out(quote, script or prefs.selected_script())

    @app.get("/api/v1/quotes/{quote_id}", response_model=QuoteOut)
    async def get_quote(
        quote_id: int,
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        quote = quotes.require(quote_id)
        return _quote_out(quote, script or prefs.selected_script())

    @app.put("/api/v1/quotes/{quote_id}", response_model=QuoteOut)
    async def update_quote(
        quote_id: int,
        body: QuoteCreate,
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        try:
            quote = quotes.save_user_quote(body.text_latin, body.author, quote_id)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quote_out(quote, script or prefs.selected_script())

    @app.delete("/api/v1/quotes/{quote_id}", status_code=204)
    async def delete_quote(quote_id: int, quotes: QuoteServiceDep) -> Response:
        quotes.delete_user_quote(quote_id)
        return Response(status_code=204)

    @app.put("/api/v1/quotes/{quote_id}/favorite", response_model=QuoteOut)
    async def set_favorite(
        quote_id: int,
        body: FavoriteUpdate,
        quotes: QuoteServiceDep,
        prefs: PreferenceServiceDep,
        script: ScriptQuery = None,
    ) -> QuoteOut:
        quote = quotes.set_favorite(quote_id, body.is_favorite)
        return _quote_out(quote, script or prefs.selected_script())

    @app.post("/api/v1/jobs/backfill", response_model=JobResponse)
    async def create_backfill_job(
        job: BackfillCreate, jobs: JobServiceDep
    ) -> JobResponse:
        return await jobs.create_backfill_job(job)

    @app.get("/api/v1/jobs/{job_id}", response_model=JobStatus)
    async def get_job(job_id: str, jobs: JobServiceDep) -> JobStatus:
        status_obj = jobs.get_job_status(job_id)
        if status_obj is None:
            raise HTTPException(status_code=404, detail="Job not found")
        return status_obj

    return app
