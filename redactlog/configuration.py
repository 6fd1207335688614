"""Logger configuration settings.

Settings are pydantic-settings models: they can be built in code or read
from the environment (and a ``.env`` file).

Environment Variables:
    LOG_APP_NAME: Application name written as ``appName`` (default: empty)
    LOG_LEVEL: trace, debug, info, warn, error, fatal, panic or disabled.
        Unknown values fall back to debug (default: debug)
    LOG_CALLER_ENABLE: Add ``file`` and ``func`` to records (default: True)
    LOG_MASKING__ENABLED: Redact sensitive fields (default: False)
    LOG_MASKING__SENSITIVE_FIELDS: JSON list of extra sensitive field names
    LOG_DURATION_UNIT: Unit of the query logger elapsed field:
        ns, us, ms, s, min or hr (default: ms)

Example:
    ```python
    from redactlog import LoggerSettings, MaskingSettings, initialize

    initialize(
        LoggerSettings(
            app_name="billing",
            level="info",
            masking=MaskingSettings(enabled=True, sensitive_fields=["iban"]),
        )
    )
    ```
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MaskingSettings(BaseModel):
    """Sensitive field masking configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(
        default=False,
        description="Redact values of sensitive fields before they are written",
    )
    sensitive_fields: List[str] = Field(
        default_factory=list,
        description="Field names added to the built-in sensitive field list",
    )


class LoggerSettings(BaseSettings):
    """Configuration of a Logger. Immutable once constructed."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(
        default="",
        description="Application name written in every record as appName",
    )
    level: str = Field(
        default="debug",
        description="Minimum severity; unknown values fall back to debug",
    )
    masking: MaskingSettings = Field(
        default_factory=MaskingSettings,
        description="Sensitive field masking",
    )
    caller_enable: bool = Field(
        default=True,
        description="Add file and func of the emitting code to every record",
    )
    duration_unit: str = Field(
        default="ms",
        description="Unit of the query logger elapsed field: ns, us, ms, s, min, hr",
    )
