from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import logging

from taskboard.config.settings import settings
from taskboard.database import Base, engine
from taskboard.exceptions import InvalidTimestamp
from taskboard.routers import auth, task, comments, profiles, dashboard

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("taskboard")

app = FastAPI(title="Taskboard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidTimestamp)
async def invalid_timestamp_handler(request: Request, exc: InvalidTimestamp):
    logger.error(f"Cannot classify task on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "field": exc.field},
    )


# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(task.router, tags=["Tasks"])
app.include_router(comments.router, tags=["Comments"])
app.include_router(profiles.router, tags=["Profiles"])
app.include_router(dashboard.router, tags=["Dashboard"])

# Public attachment URLs point here when PUBLIC_FILES_URL is a local path
if settings.STORAGE['public_url'].startswith("/"):
    app.mount(
        settings.STORAGE['public_url'],
        StaticFiles(directory=settings.STORAGE['upload_dir'], check_dir=False),
        name="files",
    )


@app.on_event("startup")
def startup_event():
    """Create missing tables when the application starts"""
    Base.metadata.create_all(bind=engine)
    logger.info("Taskboard API started")


@app.get("/")
def read_root():
    return {"message": "Taskboard API"}


@app.get("/health")
def health():
    return {"status": "ok"}
