import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from dotenv import load_dotenv

from resume_tailor.services.config import settings
from resume_tailor.services.errors import (
    ConfigurationError,
    InvalidGenerationError,
    NonRetryableServiceError,
    PoolExhaustedError,
)
from resume_tailor.utils.limiter import limiter
from resume_tailor.routers.ats import router as ats_router
from resume_tailor.routers.generation import router as generation_router

# Load environment variables
load_dotenv()

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn.error")

# Create FastAPI app
app = FastAPI(
    title="Resume Tailor",
    description="Resume tailoring, ATS scoring and cover letters",
    version="0.1.0",
    redoc_url="/redoc",
    docs_url="/docs",
)

# Include routers immediately so they appear in Swagger Docs
app.include_router(ats_router, prefix="/api")
app.include_router(generation_router, prefix="/api")

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Text-generation failures, translated once for every endpoint
@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Text generation misconfigured: {exc}")
    return JSONResponse(status_code=500, content={"error": "API key configuration error"})


@app.exception_handler(PoolExhaustedError)
async def pool_exhausted_handler(request: Request, exc: PoolExhaustedError):
    logger.error(f"Text generation unavailable: {exc}")
    return JSONResponse(status_code=429, content={"error": "API quota exceeded. Please try again later."})


@app.exception_handler(NonRetryableServiceError)
async def service_error_handler(request: Request, exc: NonRetryableServiceError):
    logger.error(f"Text generation failed: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "Text generation failed", "details": str(exc)},
    )


@app.exception_handler(InvalidGenerationError)
async def invalid_generation_handler(request: Request, exc: InvalidGenerationError):
    logger.error(f"Unusable text generation output: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Invalid response from text generation", "details": str(exc)},
    )


# Root endpoint
@app.get("/")
@limiter.limit("100/minute")
def read_root(request: Request):
    return {"message": "Welcome to Resume Tailor"}


# Local run entrypoint
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("resume_tailor.server:app", host="0.0.0.0", port=settings.PORT, reload=True)
