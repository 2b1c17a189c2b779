"""Centralised configuration handling for SpendView."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://localhost:8000"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    api_base_url: str = DEFAULT_API_BASE_URL
    access_token: str | None = None
    request_timeout: float = Field(default=10.0, gt=0)
    page_size: int = Field(default=10, gt=0)
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(env_prefix="SPENDVIEW_", extra="ignore")

    @property
    def client_kwargs(self) -> dict[str, Any]:
        return {
            "base_url": self.api_base_url.rstrip("/"),
            "timeout": self.request_timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("api")
    if secrets_section:
        overrides = {
            "api_base_url": secrets_section.get("base_url"),
            "access_token": secrets_section.get("access_token")
            or secrets_section.get("ACCESS_TOKEN"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
