"""
Application configuration via environment variables.
Uses pydantic-settings for validation and type safety.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────
    app_name: str = "JobBoardAI"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # ── AWS / Bedrock ────────────────────────────────────
    # AWS_REGION is provided by the Lambda environment
    aws_region: str = "us-east-1"
    bedrock_model_id: str = "us.anthropic.claude-3-5-haiku-20241022-v1:0"
    bedrock_max_tokens: int = 512
    bedrock_temperature: float = 0.7

    # ── PostgreSQL (AI response cache) ───────────────────
    database_url: str = ""

    # ── CORS ─────────────────────────────────────────────
    cors_origins: str = "http://localhost:3000"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
