import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send

from graphnav.rate_limit import limiter
from graphnav.routers.graph import router as graph_router
from graphnav.routers.nodes import router as nodes_router

logger = logging.getLogger(__name__)

app = FastAPI(title="graphnav API", version="0.1.0")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS: every origin is allowed unless GRAPHNAV_CORS_ORIGINS narrows it (comma-separated)
_cors_env = os.environ.get("GRAPHNAV_CORS_ORIGINS", "*")
cors_origins = [o.strip() for o in _cors_env.split(",") if o.strip()] or ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "X-Requested-With"],
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    return response


app.include_router(nodes_router)
app.include_router(graph_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


class ViewerStaticFiles(StaticFiles):
    """Static files for a single-page viewer: unknown paths get index.html."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except StarletteHTTPException as e:
            if e.status_code != 404:
                raise
            scope["path"] = "/"
            await super().__call__(scope, receive, send)


def mount_viewer(target: FastAPI, directory: str | None) -> bool:
    """Serve a built viewer from ``directory`` at ``/``. Returns False if there is none."""
    if not directory or not os.path.isdir(directory):
        return False
    logger.info("Serving viewer from %s", directory)
    target.mount("/", ViewerStaticFiles(directory=directory, html=True), name="viewer")
    return True


mount_viewer(app, os.environ.get("GRAPHNAV_WEB_DIR"))
