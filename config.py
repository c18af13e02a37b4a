from __future__ import annotations

from typing import Annotated, List, Optional
import json

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    DotEnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class SnippetsConfig(BaseSettings):
    """
    Configuration of the snippets core, based on Pydantic Settings.

    - Reads environment variables and `.env` files automatically.
    - Converts types and validates them with clear errors.
    """

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Minimum log level")
    LOG_FORMAT: str = Field(
        default="json", description="Log renderer: 'json' or 'console'"
    )

    # Hosting environment
    MULTISITE: bool = Field(
        default=False, description="Whether the site runs in multisite mode"
    )
    NETWORK_ADMIN: Optional[bool] = Field(
        default=None,
        description="Network admin screen flag; unset when there is no admin screen",
    )
    SHARED_NETWORK_SNIPPETS: Annotated[List[int], NoDecode] = Field(
        default_factory=list,
        description="Ids of network snippets shared with single sites",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("SHARED_NETWORK_SNIPPETS", mode="before")
    @classmethod
    def _parse_shared_network_snippets(cls, v):
        """Parse SHARED_NETWORK_SNIPPETS from int, CSV string, JSON string, or list.

        Invalid tokens raise ValueError instead of being silently dropped.
        Accepted formats:
        - int -> [int]
        - "1,2,3" (CSV) -> [1, 2, 3]
        - "[1, 2, 3]" (JSON) -> [1, 2, 3]
        - [1, "2", 3] -> [1, 2, 3]
        - empty/None -> []
        """
        if v is None or v == "":
            return []

        if isinstance(v, (list, tuple, set)):
            normalized: list[int] = []
            invalid_items: list[str] = []
            for item in v:
                try:
                    normalized.append(int(item))
                except Exception:
                    invalid_items.append(repr(item))
            if invalid_items:
                raise ValueError(
                    f"SHARED_NETWORK_SNIPPETS contains non-integer values: {', '.join(invalid_items)}"
                )
            return normalized

        if isinstance(v, int):
            return [v]

        # Strings: try JSON first, then CSV
        if isinstance(v, str):
            s = v.strip()
            if s == "":
                return []
            try:
                parsed = json.loads(s)
            except Exception:
                parsed = None

            if parsed is not None:
                if isinstance(parsed, list):
                    return cls._parse_shared_network_snippets(parsed)
                if isinstance(parsed, int):
                    return [parsed]
                raise ValueError(
                    "SHARED_NETWORK_SNIPPETS JSON must be a list of integers or a single integer"
                )

            parts = [p.strip() for p in s.split(",")]
            normalized = []
            invalid_tokens: list[str] = []
            for part in parts:
                if part == "":  # allow empty tokens from trailing commas
                    continue
                try:
                    normalized.append(int(part))
                except Exception:
                    invalid_tokens.append(part)
            if invalid_tokens:
                raise ValueError(
                    f"SHARED_NETWORK_SNIPPETS contains non-integer tokens: {', '.join(invalid_tokens)}"
                )
            return normalized

        raise ValueError(
            "SHARED_NETWORK_SNIPPETS must be list[int], int, CSV string, or JSON list/int"
        )

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        fmt = (v or "").strip().lower()
        if fmt not in {"json", "console"}:
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return fmt

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Allow a chain of .env files: .env.local first, then .env, on top of environment variables."""
        return (
            init_settings,
            env_settings,
            # local overrides
            DotEnvSettingsSource(settings_cls, env_file=".env.local", case_sensitive=True),
            # default .env
            DotEnvSettingsSource(settings_cls, env_file=".env", case_sensitive=True),
            file_secret_settings,
        )


def load_config() -> SnippetsConfig:
    """Load the configuration and return a SnippetsConfig instance."""
    return SnippetsConfig()


# Global config instance created at import time
try:
    config = load_config()
except ValidationError as exc:
    raise ValueError(str(exc)) from exc
