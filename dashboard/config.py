from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Notion
    notion_token: str = ""
    notion_database_id: str = ""
    notion_api_base: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: float = 30.0

    @field_validator("notion_api_base", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Comment timestamps are rendered in this zone
    display_timezone: str = "UTC"

    # Uploads
    max_upload_size_bytes: int = 20 * 1024 * 1024  # 20MB
    max_request_size_bytes: int = 21 * 1024 * 1024  # upload cap + multipart overhead

    # Frontend
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting
    rate_limit_enabled: bool = False
    rate_limit_storage_uri: str = "memory://"
    rate_limit_general_per_minute: int = 100
    rate_limit_write_per_minute: int = 30
    rate_limit_upload_per_minute: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
