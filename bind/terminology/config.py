import os
from typing import Optional

import httpx
from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, ConfigDict, field_validator


DEFAULT_BASE_URL = "https://bind.codes"


def _setting(name: str) -> Optional[str]:
    # process environment first, then a .env found from the working directory;
    # the .env is read, never exported into os.environ
    value = os.getenv(name)
    if value:
        return value
    return dotenv_values(find_dotenv(usecwd=True)).get(name) or None


def _env_timeout() -> Optional[float]:
    raw = _setting("BIND_TERMINOLOGY_TIMEOUT")
    return float(raw) if raw else None


class ClientConfig(BaseModel):
    """Settings captured once when a TerminologyClient is built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = DEFAULT_BASE_URL
    # caller-owned; never closed by the client
    transport: Optional[httpx.AsyncClient] = None
    # seconds, only used when no transport is given
    timeout: Optional[float] = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(
        cls,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """Explicit arguments win, then BIND_TERMINOLOGY_* settings, then defaults."""
        return cls(
            base_url=base_url or _setting("BIND_TERMINOLOGY_URL") or DEFAULT_BASE_URL,
            transport=transport,
            timeout=timeout if timeout is not None else _env_timeout(),
        )
