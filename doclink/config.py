from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doclink.enums import LinkVisibility


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    operator_id: str = Field(alias="OPERATOR_ID")

    default_page_size: int = Field(default=10, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=200, alias="MAX_PAGE_SIZE")
    notification_body: str = Field(default="attached a file", alias="NOTIFICATION_BODY")
    link_visibility: LinkVisibility = Field(default=LinkVisibility.viewer, alias="LINK_VISIBILITY")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required")
        if not self.operator_id.strip():
            raise ValueError("OPERATOR_ID is required")
        if self.max_page_size < 1:
            raise ValueError("MAX_PAGE_SIZE must be >= 1")
        if not (1 <= self.default_page_size <= self.max_page_size):
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")
        if not self.notification_body.strip():
            raise ValueError("NOTIFICATION_BODY must not be blank")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
