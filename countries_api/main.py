from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from countries_api.api.v1 import countries
from countries_api.api.v1.di import close_country_service
from countries_api.core.config import settings
from countries_api.core.logging_config import setup_logging
from countries_api.core.rate_limit import limiter, rate_limit_handler

# Setup logging
logger = setup_logging()

app = FastAPI(
    title="Countries API",
    description="API integrating data from the REST Countries API",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

app.include_router(countries.router, prefix=settings.API_PREFIX, tags=["countries"])


@app.get("/")
async def root():
    return {"status": "ok", "service": "Countries API", "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "Countries API"}


@app.on_event("startup")
async def startup_event():
    logger.info(
        "🚀 Countries API started (upstream=%s, ttl=%ss)",
        settings.REST_COUNTRIES_API_URL,
        settings.CACHE_TTL,
    )


@app.on_event("shutdown")
async def shutdown_event():
    await close_country_service()
    logger.info("🛑 Countries API shutting down")
