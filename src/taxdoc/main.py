from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from taxdoc import __version__
from taxdoc.api.documents import router as documents_router
from taxdoc.config import get_settings
from taxdoc.logging_config import configure_logging
from taxdoc.telemetry import emit_app_startup_event

settings = get_settings()
configure_logging(settings.log_dir, settings.log_level)

app = FastAPI(title="Income-Tax Document Intelligence API", version=__version__)
app.include_router(documents_router)


@app.on_event("startup")
async def _emit_startup() -> None:
    emit_app_startup_event()


@app.get("/", response_class=PlainTextResponse)
def read_root() -> str:
    """Healthcheck endpoint for the service."""
    return "ok"


@app.get("/healthz", response_class=PlainTextResponse)
def healthcheck() -> str:
    """Liveness probe used by container orchestrators."""
    return "ok"
