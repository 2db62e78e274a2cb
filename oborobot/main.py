from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from oborobot import config
from oborobot.db.repo import init_db
from oborobot.errors import SuggestionError
from oborobot.routers import metrics, question, user
from oborobot.utils import slog
from oborobot.utils.logging import configure_logging
from oborobot.utils.metrics import record_endpoint, record_error


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    init_db()
    yield


app = FastAPI(
    title="Oborobot Question API",
    version=config.api_version(),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(SuggestionError)
async def _suggestion_error_handler(request: Request, exc: SuggestionError):
    record_error(exc.code)
    slog.add_context(request, error_kind=exc.code)
    if not exc.user_facing:
        logger.error(f"[api] {exc.code}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content=[{"message": exc.message, "code": exc.code}],
    )


@app.middleware("http")
async def _logging_middleware(request, call_next):
    start = time.perf_counter()
    req_id = slog.new_request_id()
    client_ip = request.client.host if request.client else None
    try:
        response = await call_next(request)
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        ctx = slog.get_context(request)
        slog.log_event(
            "request.error",
            request_id=req_id,
            path=str(request.url.path),
            method=request.method,
            latency_ms=latency_ms,
            client_ip=client_ip,
            error=str(e),
            **ctx,
        )
        raise
    latency_ms = int((time.perf_counter() - start) * 1000)
    ctx = slog.get_context(request)
    slog.finalize_request_log(
        request_id=req_id,
        method=request.method,
        path=str(request.url.path),
        status=response.status_code,
        latency_ms=latency_ms,
        client_ip=client_ip,
        ctx=ctx,
    )
    record_endpoint(method=request.method, path=str(request.url.path), latency_ms=latency_ms)
    response.headers["X-Request-ID"] = req_id
    return response


@app.get("/health")
def health():
    return {"status": "ok", "version": config.api_version()}


app.include_router(question.router)
app.include_router(user.router)
app.include_router(metrics.router)
