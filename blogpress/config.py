import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Blog Publisher API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./data/blogpress.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Process-wide WordPress defaults (per-owner settings take precedence field by field)
    wordpress_url: str = ""
    wordpress_username: str = ""
    wordpress_application_password: str = ""

    # CMS client behaviour
    cms_timeout_seconds: float = 10.0
    cms_post_status: str = "publish"
    cms_user_agent: str = "BlogPublisher/1.0"

    # Publication lease: how long a publish attempt may hold an article
    publish_claim_ttl_seconds: int = 300

    # Authentication: bearer token → owner id
    auth_tokens: dict[str, str] = {}

    # Shared secret for the due-publication cron endpoint (empty disables it)
    cron_secret: str = ""

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore: outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_publication: str = "INFO"      # PublicationService stages
    log_level_cms: str = "INFO"              # WordPress client

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Normalise the default CMS URL once at load time."""
        if self.wordpress_url.endswith("/"):
            object.__setattr__(self, "wordpress_url", self.wordpress_url.rstrip("/"))
        if self.auth_tokens and self.app_env == "production":
            _config_logger.warning(
                "Static AUTH_TOKENS are configured in production (%d tokens)",
                len(self.auth_tokens),
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
