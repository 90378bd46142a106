"""
FastAPI application for the grocery consolidation engine.

Exposes:
- GET /health for load balancers and container orchestration
- The shopping list routes under /api
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grocery.config import Settings, configure_logging
from grocery.api.routes import shop

settings = Settings.from_env()

# Configure logging
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Grocery Consolidation API",
    description="Consolidated, categorized shopping lists from recipe text",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check():
    """
    Health check endpoint.

    Returns 200 if the service is healthy. The engine holds no connections,
    so there is nothing else to check.
    """
    return {"status": "healthy"}


app.include_router(shop.router, prefix="/api", tags=["shopping"])


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Grocery Consolidation API on port {settings.port}")
    uvicorn.run(
        "grocery.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
