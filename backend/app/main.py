import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import Config
from app.db.database import Database
from app.routers import health, user, product, feedback, statistic, utils
from app.exceptions import (
    AppException,
    app_exception_handler,
    validation_exception_handler,
    generic_exception_handler,
)
from app.services.sentiment_service import SentimentAnalyzer

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db = Database(Config.DATABASE_URL, Config.DATABASE_TYPE)
    app.state.analyzer = SentimentAnalyzer()
    await app.state.db.connect()
    if Config.CREATE_TABLES:
        await app.state.db.create_all()
    yield
    await app.state.analyzer.aclose()
    await app.state.db.disconnect()


app = FastAPI(
    title="Feedback Insights API",
    version="1.0.0",
    description="Users, products and sentiment-scored feedback",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url.path}")
    return await call_next(request)


# Include routers
app.include_router(health.router)
app.include_router(user.router)
app.include_router(product.router)
app.include_router(feedback.router)
app.include_router(statistic.router)
app.include_router(utils.router)
