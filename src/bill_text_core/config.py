from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    current_session: int = Field(alias="CURRENT_SESSION")
    data_dir: Path = Field(default=Path("data"), alias="DATA_DIR")

    pg_dsn: str | None = Field(default=None, alias="PG_DSN")
    pg_schema: str = Field(default="public", alias="PG_SCHEMA")
    postgres_host: str | None = Field(default=None, alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")
    postgres_db: str | None = Field(default=None, alias="POSTGRES_DB")
    postgres_user: str | None = Field(default=None, alias="POSTGRES_USER")
    postgres_password: SecretStr | None = Field(default=None, alias="POSTGRES_PASSWORD")

    qdrant_url: str = Field(alias="QDRANT_URL")
    qdrant_api_key: str | None = Field(default=None, alias="QDRANT_API_KEY")
    qdrant_bills_collection: str = Field(default="bills", alias="QDRANT_BILLS_COLLECTION")
    qdrant_versions_collection: str = Field(default="bill_versions", alias="QDRANT_VERSIONS_COLLECTION")

    citation_service_url: str | None = Field(default=None, alias="CITATION_SERVICE_URL")

    nats_url: str | None = Field(default=None, alias="NATS_URL")
    nats_report_subject: str = Field(default="reports.bill_text_archive", alias="NATS_REPORT_SUBJECT")

    isolate_failures: bool = Field(default=False, alias="ISOLATE_FAILURES")


def load_settings() -> Settings:
    return Settings()
