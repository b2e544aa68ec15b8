import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from acm_calculator.config import settings
from acm_calculator.exceptions import InputValidationError
from acm_calculator.routes import acm_router, eligibility_router
from acm_calculator.services.snapshot_service import snapshot_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    snapshot = await snapshot_service.load_configured()
    logger.info(
        f"ACM snapshot ready: table {snapshot.version.acm_table_edition}, "
        f"guide {snapshot.version.acm_guide_edition}"
    )
    yield
    # Shutdown
    logger.info("ACM Claim Calculator shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Estimates HRD Corp claimable training costs under the Allowable Cost Matrix",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(eligibility_router, prefix=settings.api_prefix)
app.include_router(acm_router, prefix=settings.api_prefix)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed calculation request bodies are reported as input errors (400)"""
    if not request.url.path.startswith(f"{settings.api_prefix}{eligibility_router.prefix}"):
        return await request_validation_exception_handler(request, exc)

    errors = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "body"
        errors.append(f"{location}: {err.get('msg', 'invalid value')}")
    error = InputValidationError(f"Invalid request body: {'; '.join(errors)}", errors)
    logger.warning(str(error))
    return JSONResponse(status_code=400, content={"detail": error.to_dict()})


@app.get("/")
async def root():
    return {"message": f"{settings.app_name} is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    snapshot = snapshot_service.current()
    return {
        "status": "healthy",
        "service": "acm-calculator",
        "acm_edition": snapshot.version.acm_table_edition
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("acm_calculator.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
