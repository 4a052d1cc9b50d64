from __future__ import annotations

import json
import logging
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHINESE_ERA_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_title: str = Field(default="Chinese Era Converter API", description="FastAPI application title")
    app_description: str = Field(
        default="年號紀年と西暦を相互に変換するためのAPI",
        description="OpenAPI 用の説明文",
    )
    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="CORS で許可するオリジンの一覧 (カンマ区切りまたは JSON 配列)",
    )
    log_level: str = Field(
        default="INFO",
        description="アプリケーションログのレベル (DEBUG/INFO/WARNING/ERROR/CRITICAL)",
    )
    enable_request_logging: bool = Field(
        default=True,
        description="各リクエストのログ出力を有効化",
    )
    catalog_path: str = Field(
        default="",
        description="年號定義 JSON のパス。空の場合は同梱のカタログを使用",
    )
    default_candidate_limit: int = Field(
        default=5,
        description="候補検索で limit が指定されなかったときの既定件数",
        ge=1,
        le=100,
    )
    max_input_characters: int = Field(
        default=1_000,
        description="入力テキストの最大文字数上限",
        ge=16,
        le=100_000,
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):  # type: ignore[override]
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("["):
                return json.loads(raw)
            return [origin.strip() for origin in raw.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:  # type: ignore[override]
        candidate = value.upper()
        if candidate not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            logging.getLogger("chinese_era.settings").warning(
                "Unknown log level '%s', falling back to INFO.", value
            )
            return "INFO"
        return candidate


settings = Settings()
