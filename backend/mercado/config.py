from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "mercado"
    env: str = "local"
    log_level: str = "INFO"

    database_dsn: str = "sqlite:///./mercado.db"

    # Remote document store (authoritative across devices, reachable only sometimes)
    remote_base_url: str = "http://localhost:8080/v1/documents"
    remote_api_key: str = ""
    remote_timeout_s: float = 30.0

    auth_base_url: str = "http://localhost:8080/v1/accounts"
    auth_api_key: str = ""

    # Empty: plan-commit locks are in-process. Set to share them across workers.
    redis_url: str = ""
    plan_lock_timeout_s: int = 30

    weeks_per_month: float = 4.3

    # Fix the composer's random source (tests, reproducible demos)
    random_seed: Optional[int] = None

    class Config:
        env_file = ".env"


settings = Settings()
