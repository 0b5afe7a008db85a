from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    db_pool_timeout_seconds: int = 10
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "taskhub"
    jwt_audience: str = "taskhub"
    jwt_expires_minutes: int = 60

    bcrypt_rounds: int = 12

    # policy knobs for deletes, single-entity reads and login failures
    delete_requires_admin: bool = False
    perm_overrides: dict[str, list[str]] = {}
    scope_single_reads_to_org: bool = False
    unify_login_errors: bool = False

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_login_per_min: int = 30
    rate_limit_register_per_min: int = 20

    log_level: str = "INFO"
    log_json: bool = False

settings = Settings()
