"""
Configuration module for neo4j-rest-traversal.

Uses pydantic-settings for environment-based configuration of the
Neo4j REST endpoint and the default paging window for paged traversals.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Paging defaults mirror the server's own defaults:
    - traversal_page_size: results returned per page
    - traversal_page_lease_seconds: how long an idle cursor stays alive
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # NEO4J REST CONFIGURATION
    # ===========================================
    neo4j_rest_url: str = Field(
        default="http://localhost:7474",
        description="Neo4j server root URL (REST API)",
    )
    neo4j_user: str = Field(default="neo4j", description="Neo4j username")
    neo4j_password: str = Field(
        default="devpassword",
        description="Neo4j password",
    )
    neo4j_request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for a single HTTP request",
    )

    # ===========================================
    # PAGED TRAVERSAL DEFAULTS
    # ===========================================
    traversal_page_size: int = Field(
        default=50,
        ge=1,
        description="Number of results per page of a paged traversal",
    )
    traversal_page_lease_seconds: int = Field(
        default=60,
        ge=1,
        description="Seconds an inactive paging cursor stays valid server-side",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
