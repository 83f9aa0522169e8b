"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApiSchema(_StrictBase):
    base_url: str
    upload_base_url: str
    timeout_seconds: float = Field(gt=0)


class UploadSchema(_StrictBase):
    poll_interval_seconds: float = Field(ge=0)
    interactive_poll_interval_seconds: float = Field(ge=0)


class InteractiveSchema(_StrictBase):
    clear_screen: bool
    selection_attempts: int = Field(ge=1)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    api: ApiSchema
    upload: UploadSchema
    interactive: InteractiveSchema


# =============================================================================
# logging.yaml
# =============================================================================


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["console", "json"]
