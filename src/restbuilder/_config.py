from os import environ as env
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, HttpUrl, field_validator

PREFIX = "RESTBUILDER_"
ENV_BASE_URL = f"{PREFIX}BASE_URL"
ENV_TIMEOUT = f"{PREFIX}TIMEOUT"
ENV_DEBUG = f"{PREFIX}DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    base_url: str = ""
    timeout: float = 30.0
    debug: bool = False

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_url(cls, value: Any) -> str:
        if value is None or value == "":
            return ""
        HttpUrl(url=value)
        return value

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        assert value > 0, "timeout must be positive"
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a Config from ``RESTBUILDER_*`` variables and a ``.env`` file.

        Keyword arguments that are not None take precedence over the
        environment.
        """
        load_dotenv()

        values: dict[str, Any] = {}
        if base_url := env.get(ENV_BASE_URL):
            values["base_url"] = base_url
        if timeout := env.get(ENV_TIMEOUT):
            values["timeout"] = timeout
        if debug := env.get(ENV_DEBUG):
            values["debug"] = debug.strip().lower() in _TRUTHY

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
