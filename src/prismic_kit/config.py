"""
Configuration for the prismic.io client.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Client configuration loaded from environment variables.

    Environment variables:
        PRISMIC_MAX_CONNECTIONS: Maximum pooled connections for the shared client.
                                 Default: 20
        PRISMIC_CONNECT_TIMEOUT: Connect timeout in seconds. Default: 3
        PRISMIC_IDLE_TIMEOUT: Read/pool timeout in seconds. Default: 3
        PRISMIC_REQUEST_TIMEOUT: Overall request timeout in seconds. Default: 5
        PRISMIC_USER_AGENT: User-Agent header sent with every request.
        PRISMIC_API_TTL: How long the API document stays cached, in milliseconds.
                         Default: 5000
    """

    max_connections: int = Field(
        default=20,
        alias="PRISMIC_MAX_CONNECTIONS",
        description="Maximum pooled connections for the shared HTTP client"
    )

    connect_timeout: float = Field(
        default=3.0,
        alias="PRISMIC_CONNECT_TIMEOUT",
        description="Connect timeout in seconds"
    )

    idle_timeout: float = Field(
        default=3.0,
        alias="PRISMIC_IDLE_TIMEOUT",
        description="Read and pool timeout in seconds"
    )

    request_timeout: float = Field(
        default=5.0,
        alias="PRISMIC_REQUEST_TIMEOUT",
        description="Overall request timeout in seconds"
    )

    user_agent: str = Field(
        default="Prismic",
        alias="PRISMIC_USER_AGENT",
        description="User-Agent header sent with every request"
    )

    api_ttl: int = Field(
        default=5000,  # 5 seconds
        alias="PRISMIC_API_TTL",
        description="API document cache TTL in milliseconds"
    )


# Global settings instance
settings = Settings()
