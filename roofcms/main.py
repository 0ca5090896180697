import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from roofcms.core.config import get_settings
from roofcms.core.logging import configure_logging
from roofcms.db.store import StoreError
from roofcms.routers import admin

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("roofcms.main")

app = FastAPI(title=settings.project_name)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie_name,
    same_site=settings.session_cookie_same_site,
    https_only=settings.session_cookie_secure,
    max_age=settings.session_cookie_max_age,
)

app.include_router(admin.router)


@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok"}


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("store_error_response", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(
        {"detail": "The database is unavailable. Please try again."},
        status_code=503,
    )
