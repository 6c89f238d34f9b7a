"""
Configuration Module
====================

Service settings (pydantic-settings, read from the environment and .env)
and the string constants shared by the routing engine.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path
from typing import List, Optional


class Settings(BaseSettings):
    """
    AskRexi settings. Every field can be set through an environment
    variable of the same name, case-insensitive.
    """

    # ========== Application ==========
    app_name: str = Field(default="askrexi", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy URL of the knowledge store; unset means in-memory"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Routing ==========
    routing_config_path: Path = Field(
        default=Path("routing.yaml"),
        description="Path to routing table YAML file"
    )

    # ========== Knowledge Lookup ==========
    knowledge_lookup_timeout_seconds: float = Field(
        default=2.0,
        description="Upper bound for a single knowledge store query",
        gt=0,
        le=30
    )
    knowledge_candidate_limit: int = Field(
        default=25,
        description="Maximum candidate entries scored per lookup",
        ge=1,
        le=500
    )
    regulatory_update_limit: int = Field(
        default=5,
        description="Maximum regulatory intelligence records cited per answer",
        ge=1,
        le=50
    )
    assessment_question_limit: int = Field(
        default=3,
        description="Maximum assessment questions cited per answer",
        ge=1,
        le=50
    )

    # ========== Usage Analytics ==========
    usage_question_prefix_length: int = Field(
        default=50,
        description="Characters of the question kept in usage records",
        ge=0
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class DomainName(str):
    """Broad question domains, one handler each."""
    REGULATORY = "regulatory"
    ASSESSMENT = "assessment"
    ANALYTICS = "analytics"
    GENERAL = "general"


class ResponseCategory(str):
    """Categories carried on composed answers."""
    REGULATORY = "regulatory"
    ASSESSMENT = "assessment"
    ANALYTICS = "analytics"
    COMPLIANCE = "compliance"
    GENERAL = "general"


class ImpactLevel(str):
    """Impact of the guidance on a compliance program."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SourceType(str):
    """Kinds of cited sources."""
    REGULATION = "regulation"
    GUIDANCE = "guidance"
    ANALYTICS = "analytics"
    ASSESSMENT = "assessment"
    COMPLIANCE = "compliance"


class ExpertiseLevel(str):
    """Reader expertise used for answer personalization."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


class ResponseStyle(str):
    """Preferred answer style."""
    DETAILED = "detailed"
    CONCISE = "concise"
    CONVERSATIONAL = "conversational"


class MessageRole(str):
    """Conversation message authors."""
    USER = "user"
    ASSISTANT = "assistant"


class MatchRule(str):
    """How a trigger phrase set fires."""
    ANY = "any"
    ALL = "all"


class RecordStatus(str):
    """Publication states of reference records; only these are served."""
    ACTIVE = "active"
    APPROVED = "approved"


# ========== Lists for validation ==========

IMPACT_LEVELS = [
    ImpactLevel.LOW, ImpactLevel.MEDIUM,
    ImpactLevel.HIGH, ImpactLevel.CRITICAL
]
SOURCE_TYPES = [
    SourceType.REGULATION, SourceType.GUIDANCE, SourceType.ANALYTICS,
    SourceType.ASSESSMENT, SourceType.COMPLIANCE
]
EXPERTISE_LEVELS = [
    ExpertiseLevel.BEGINNER, ExpertiseLevel.INTERMEDIATE, ExpertiseLevel.EXPERT
]
RESPONSE_STYLES = [
    ResponseStyle.DETAILED, ResponseStyle.CONCISE, ResponseStyle.CONVERSATIONAL
]
MESSAGE_ROLES = [MessageRole.USER, MessageRole.ASSISTANT]
MATCH_RULES = [MatchRule.ANY, MatchRule.ALL]
