"""
AskRexi - Main Application
==========================

Regulatory compliance assistant for pharmaceutical AI programs.

Modules:
- Agents: question routing, domain handlers, topic specialists
- Knowledge: curated Q&A lookup

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Router, handlers, specialists and DTOs
- Domain: Entities, value objects, matching and composition
- Infrastructure: Database, YAML routing config, usage analytics
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration
from askrexi.config import settings

# Infrastructure
from askrexi.infrastructure.database import (
    close_database, create_tables, get_session_maker, init_database
)

# Agents Module
from askrexi.agents.application import build_router
from askrexi.agents.infrastructure import (
    LoggingUsageAnalytics, RoutingConfigManager, SQLAlchemyUsageAnalytics
)
from askrexi.agents.interfaces import askrexi_router

# Knowledge Module
from askrexi.knowledge.infrastructure import (
    InMemoryAssessmentQuestionStore,
    InMemoryKnowledgeStore,
    InMemoryRegulatoryIntelligenceStore,
    SQLAlchemyAssessmentQuestionStore,
    SQLAlchemyKnowledgeStore,
    SQLAlchemyRegulatoryIntelligenceStore,
)

# Middleware and Logging
from askrexi.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    TimingMiddleware,
    global_exception_handler
)
from askrexi.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load the routing table
    3. Initialize database (when configured)
    4. Build knowledge, reference record stores and usage analytics
    5. Build the Router

    SHUTDOWN:
    1. Drain pending usage records
    2. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting AskRexi", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Loading routing configuration")
    routing_config = RoutingConfigManager()
    table = routing_config.load(settings.routing_config_path)

    if settings.database_url:
        logger.info("Initializing database")
        init_database()
        try:
            await create_tables()
        except Exception as e:
            logger.warning(f"Database not available - running in degraded mode: {e}")
        store = SQLAlchemyKnowledgeStore(get_session_maker())
        intelligence_store = SQLAlchemyRegulatoryIntelligenceStore(get_session_maker())
        question_store = SQLAlchemyAssessmentQuestionStore(get_session_maker())
        usage = SQLAlchemyUsageAnalytics(get_session_maker())
        store_kind = "database"
    else:
        logger.info("No database configured - knowledge store is in-memory")
        store = InMemoryKnowledgeStore()
        intelligence_store = InMemoryRegulatoryIntelligenceStore()
        question_store = InMemoryAssessmentQuestionStore()
        usage = LoggingUsageAnalytics()
        store_kind = "in-memory"

    agent_router = build_router(
        table=table,
        store=store,
        usage=usage,
        lookup_timeout_seconds=settings.knowledge_lookup_timeout_seconds,
        candidate_limit=settings.knowledge_candidate_limit,
        question_prefix_length=settings.usage_question_prefix_length,
        intelligence_store=intelligence_store,
        question_store=question_store,
        regulatory_update_limit=settings.regulatory_update_limit,
        assessment_question_limit=settings.assessment_question_limit,
    )

    # Store services in app state for dependency injection
    app.state.settings = settings
    app.state.router = agent_router
    app.state.knowledge_store = store_kind

    logger.info("AskRexi started successfully", extra={"domains": list(table.domain_names)})

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down AskRexi")
    await agent_router.drain()

    if settings.database_url:
        await close_database()

    logger.info("AskRexi shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="AskRexi API",
    description="""
    ## AskRexi Compliance Assistant

    Answers regulatory compliance questions for pharmaceutical AI programs.

    **Endpoints:**
    - `POST /askrexi` - Ask a question
    - `GET /askrexi/capabilities` - Domain and specialist capabilities

    **Domains:** regulatory (FDA, EMA, ICH, general regulatory specialists),
    assessment, analytics, general compliance.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware ===
app.add_middleware(LoggingMiddleware)
app.add_middleware(TimingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(askrexi_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service is healthy",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "router": "ready",
                        "knowledge_store": "in-memory",
                        "domains": ["regulatory", "assessment", "analytics", "general"]
                    }
                }
            }
        }
    }
})
async def health_check(request: Request):
    """Health check endpoint for load balancers and orchestrators."""
    agent_router = getattr(request.app.state, "router", None)
    checks = {
        "router": "ready" if agent_router is not None else "not_initialized",
        "knowledge_store": getattr(request.app.state, "knowledge_store", "unknown"),
        "domains": list(agent_router.table.domain_names) if agent_router is not None else [],
    }

    return {
        "status": "healthy" if agent_router is not None else "starting",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "AskRexi",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
    }


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "askrexi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
