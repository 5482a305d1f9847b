"""
RSLP Stemmer - FastAPI service for Portuguese stemming

Endpoints:
- GET  /        service description
- GET  /health  liveness
- POST /stem    stem every space-separated word of a text

The rule table is parsed once at startup and shared by all requests.
If it cannot be parsed the service does not start.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
env_local = project_root / ".env.local"
env_file = project_root / ".env"

if env_local.exists():
    load_dotenv(env_local, override=True)
elif env_file.exists():
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from src.logging_config import setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", "logs/rslp-stemmer.log"),
    console_level=console_level,
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)


from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .rslp import RSLPStemmer, RuleFormatError, load_rules

# Configuration from environment variables
DEFAULT_RULES_PATH = project_root / "assets" / "portuguese.rslp"
PORT = int(os.getenv("PORT", "8080"))

APP_VERSION = "1.0.0"
APP_START_TIME = datetime.utcnow().isoformat() + "Z"

# Bound once in lifespan
stemmer: Optional[RSLPStemmer] = None


def rules_path() -> Path:
    return Path(os.getenv("RSLP_RULES_PATH", str(DEFAULT_RULES_PATH)))


def remove_accents_enabled() -> bool:
    return os.getenv("RSLP_REMOVE_ACCENTS", "true").lower() == "true"


def build_stemmer() -> RSLPStemmer:
    """
    Parse the configured rule table and bind it into a stemmer.

    Raises:
        FileNotFoundError: rule file missing
        RuleFormatError: rule file malformed (message includes the offending line)
    """
    path = rules_path()
    try:
        stages = load_rules(path)
    except RuleFormatError as e:
        logger.error(f"Invalid rule file {path}: {e}")
        raise
    except FileNotFoundError:
        logger.error(f"Rule file not found: {path}")
        raise

    return RSLPStemmer(stages, remove_accents=remove_accents_enabled())


def stem_text(text: str) -> str:
    """Stem each space-separated word and rejoin with single spaces"""
    return " ".join(stemmer.stem(word) for word in text.split(" "))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the rule table before serving"""
    global stemmer

    logger.info(f"Loading RSLP rules from {rules_path()}...")
    stemmer = build_stemmer()
    logger.info("RSLP stemmer initialized successfully")

    yield

    logger.info("Shutting down...")
    stemmer = None


app = FastAPI(
    title="RSLP Stemmer API",
    description="Portuguese stemming with the RSLP suffix-stripping algorithm",
    version=APP_VERSION,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    stages: int
    started_at: str
    uptime_seconds: float


class StemRequest(BaseModel):
    text: str = Field(..., description="Text to stem (words separated by spaces)", min_length=1)

    class Config:
        json_schema_extra = {
            "example": {"text": "os meninos estavam caminhando"}
        }


class StemResponse(BaseModel):
    original: str
    stemmed: str


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "RSLP Stemmer API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check"""
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()

    return HealthResponse(
        status="ok",
        version=APP_VERSION,
        stages=len(stemmer.stages) if stemmer else 0,
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
    )


@app.post("/stem", response_model=StemResponse)
def stem(request: StemRequest):
    """
    Stem every word of a text.

    The text is split on single spaces; each token is stemmed independently
    and the results are joined with single spaces.
    """
    stemmed = stem_text(request.text)
    logger.debug(f"Stemmed {request.text!r} -> {stemmed!r}")
    return StemResponse(original=request.text, stemmed=stemmed)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=PORT,
    )
