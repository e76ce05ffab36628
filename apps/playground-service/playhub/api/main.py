"""
FastAPI app assembly: logging, middleware, error mapping and router wiring.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from playhub.api.playgrounds import router as playgrounds_router
from playhub.api.users import router as users_router
from playhub.errors import InvalidInput, NotFound, StoreError, StoreUnavailable, WriteFailed
from playhub.services.controller import Controller

STATUS_BY_KIND = {
    InvalidInput: 400,
    NotFound: 404,
    WriteFailed: 409,
    StoreUnavailable: 503,
}

app = FastAPI(
    title="Playground Service",
    description="API for playgrounds, their pedagogues, events and messages.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

origins = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.controller = Controller()


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    status_code = STATUS_BY_KIND.get(type(exc), 500)
    if status_code >= 500:
        logger.error("request_failed: %s %s kind=%s error=%s", request.method, request.url.path, exc.kind, exc)
    return JSONResponse({"detail": str(exc), "kind": exc.kind}, status_code=status_code)


app.include_router(playgrounds_router)
app.include_router(users_router)


@app.get("/health")
def health():
    return {"status": "ok", "store": app.state.controller.data_source.engine.dialect.name}
