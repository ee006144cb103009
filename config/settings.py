"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Server ───────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list = ["*"]

    # ── Security Secrets ──────────────────────────────────────────────────
    secret_key: str = "change-me-secret-key"     # HMAC secret for auth tokens
    token_ttl_seconds: int = 3600                 # 1 hour
    bcrypt_rounds: int = 10

    # ── Datastore ────────────────────────────────────────────────────────
    db_file: str = "./db.json"

    # ── Posts ────────────────────────────────────────────────────────────
    default_page_limit: int = 10

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


config = Settings()
