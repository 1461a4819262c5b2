import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .domain.clients import router as clients_router
from .domain.recurring import router as recurring_router
from .domain.schedule import router as schedule_router
from .shared.constants import WORKER_ROSTER, TeamId
from .shared.exceptions import NotFoundError, StorageError, ValidationError

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("botocore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    logger.info(f"Storage backend: {config.STORAGE_BACKEND}")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Abra Scheduling API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.field}: {exc.message}")
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"❌ {request.method} {request.url.path} - Storage error: {exc.message}")
    return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": exc.errors()})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# CORS Configuration
logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(schedule_router)
app.include_router(clients_router)
app.include_router(recurring_router)


@app.get("/")
def root():
    return {"message": "Abra Scheduling API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/roster")
def roster():
    """Workers and teams accepted by the schedule endpoints"""
    return {"workers": list(WORKER_ROSTER), "teams": [team.value for team in TeamId]}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
