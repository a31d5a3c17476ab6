from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "CaseDesk"
    database_url: str = Field(default="sqlite:///./casedesk.db")
    # "sql" keeps records in database_url, "memory" keeps them in-process
    storage_backend: str = Field(default="sql", pattern="^(sql|memory)$")
    secret_key: str = Field(default="dev-change-me")
    session_cookie: str = "casedesk_session"
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    default_admin_email: str = "admin@example.com"
    default_admin_password: str = "TestPass123!"
    default_admin_name: str = "Admin User"


settings = Settings()
