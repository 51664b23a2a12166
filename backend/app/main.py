"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.sessions import SessionMiddleware

from app.config import settings
from app.database import Base, engine
from app.services.collection_locks import CollectionLocks
from app.services.exceptions import ClinicError

# Import routers
from app.routers import admin, appointments, feedbacks, payments, submissions

# Import all models so Base.metadata knows about them
from app.models.record import Record        # noqa: F401
from app.models.snapshot import Snapshot    # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Clinic Booking",
    description="Appointment and feedback intake with an admin console (clear / undo backed by snapshots)",
    version="0.1.0",
)

# One lock per collection, shared by every request in this process
app.state.collection_locks = CollectionLocks()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed-cookie admin session
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
    return response


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    # "message" is what the admin console displays.
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, "message": exc.message})


# Register routers
app.include_router(submissions.router, prefix="/api", tags=["Submissions"])
app.include_router(appointments.router, prefix="/api/appointments", tags=["Appointments"])
app.include_router(feedbacks.router, prefix="/api/feedbacks", tags=["Feedback"])
app.include_router(payments.router, prefix="/api", tags=["Payments"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Clinic booking backend is live"


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
