"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from treasury_bot.config import settings
from treasury_bot.database import SessionLocal
from treasury_bot.rate_limiter import limiter
from treasury_bot.runtime import build_runtime

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the bot runtime on startup and release it on shutdown."""
    app.state.runtime = build_runtime(settings, SessionLocal)
    logger.info("Treasury bot started")
    yield
    app.state.runtime.close()


# Create FastAPI app
app = FastAPI(
    title="Treasury Bot API",
    description="Telegram reporting bot for checks in portfolio and treasury balances",
    version="0.1.0",
    docs_url="/docs" if settings.debug else None,
    redoc_url=None,
    lifespan=lifespan,
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Treasury Bot API", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include routers
from treasury_bot.routers import notifications, telegram  # noqa: E402

app.include_router(telegram.router)
app.include_router(notifications.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
