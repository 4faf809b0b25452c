from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 12
    app_env: str = "development"  # development, staging, production

    # All resource routers are mounted under this prefix
    api_prefix: str = "/api/v1"

    # CORS origins as comma-separated values, "*" allows any origin
    cors_allow_origins: str = "*"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # When true, only the creator of a job may list its applicants or change
    # the status of its applications. False lets any authenticated caller do both.
    enforce_job_owner_checks: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
