import logging

from fastapi import FastAPI

from .exceptions import ContentError
from .routers import content
from .services.content_store import get_store


logger = logging.getLogger(__name__)

app = FastAPI(title="metapress")

app.include_router(content.router)


@app.on_event("startup")
def startup() -> None:
    try:
        get_store().reload()
    except (ContentError, OSError) as exc:
        # Keep serving; queries answer from whatever was published before.
        logger.warning("Initial content load failed: %s", exc)


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
