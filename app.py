from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from slowapi import _rate_limit_exceeded_handler, errors

# Import core modules
import config
from core_logic import logger
from encoding import get_service_encoder_config
from router import api_router, web_router, limiter

# --- LIFESPAN AND APP SETUP ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    config.config.validate()
    # Builds the cached codec config so a bad key fails at startup, not on first request.
    encoder_config = get_service_encoder_config()
    logger.info(
        f"Application started (salt_length={encoder_config.salt_length}, "
        f"iterations={encoder_config.iterations}, checksum={encoder_config.include_checksum})"
    )
    try:
        yield
    finally:
        logger.info("Application shutdown complete")

# Main app instance
app = FastAPI(
    title="ID Codec",
    lifespan=lifespan
)

# --- MIDDLEWARE ---
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(errors.RateLimitExceeded, _rate_limit_exceeded_handler)


# --- APPLICATION MOUNTING ---

app.include_router(api_router)
app.include_router(web_router)


# --- GLOBAL ERROR HANDLER ---

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
