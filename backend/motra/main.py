import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from motra.api.stats import router as stats_router
from motra.api.tiers import router as tiers_router
from motra.api.tracking import router as tracking_router
from motra.api.workouts import router as workouts_router
from motra.core.config import settings
from motra.core.exceptions import (
    FileImportError,
    RepositoryError,
    TrackingError,
    WorkoutNotFoundError,
)
from motra.db import Base, engine
from motra.models.route_point import WorkoutRoutePoint  # noqa: F401  (import ensures table is registered)
from motra.models.workout import Workout  # noqa: F401
from motra.tracking.session import build_tracking_session

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.tracking_session.close()


app = FastAPI(title="Motra", lifespan=lifespan)

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (workouts, route points) on startup
Base.metadata.create_all(bind=engine)

# The one live tracking session, handed to routes via motra.api.deps
app.state.tracking_session = build_tracking_session(settings)

app.include_router(tracking_router)
app.include_router(workouts_router)
app.include_router(tiers_router)
app.include_router(stats_router)


@app.exception_handler(TrackingError)
def tracking_error_handler(request: Request, exc: TrackingError):
    # wrong-state calls are client bugs: report the conflict, keep the session
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(WorkoutNotFoundError)
def not_found_handler(request: Request, exc: WorkoutNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(RepositoryError)
def repository_error_handler(request: Request, exc: RepositoryError):
    logger.error("Record store failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(FileImportError)
def import_error_handler(request: Request, exc: FileImportError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/")
def root():
    return {"message": "Motra backend is running"}
