# csp_filter/schemas.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

KEYWORD_NONE = "'none'"
KEYWORD_SELF = "'self'"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# --- Policy Schemas ---
class PolicyConfig(BaseModel):
    """Directive values for one Content-Security-Policy header.

    Built once at startup and shared read-only between requests. Field
    aliases are the hyphenated option keys (``default-src``, ``img-src``...),
    so a plain options mapping validates directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    report_only: bool = Field(default=False, alias="report-only")
    report_uri: Optional[str] = Field(default=None, alias="report-uri")
    sandbox: Optional[str] = None
    default_src: str = Field(default=KEYWORD_NONE, alias="default-src")
    img_src: Optional[str] = Field(default=None, alias="img-src")
    script_src: Optional[str] = Field(default=None, alias="script-src")
    style_src: Optional[str] = Field(default=None, alias="style-src")
    font_src: Optional[str] = Field(default=None, alias="font-src")
    connect_src: Optional[str] = Field(default=None, alias="connect-src")
    object_src: Optional[str] = Field(default=None, alias="object-src")
    media_src: Optional[str] = Field(default=None, alias="media-src")
    frame_src: Optional[str] = Field(default=None, alias="frame-src")

    @field_validator("report_only", mode="before")
    @classmethod
    def validate_report_only(cls, value: Any) -> bool:
        # Only the literal "true" (any case) switches report-only on.
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() == "true"
        return False

    @field_validator("default_src", mode="before")
    @classmethod
    def validate_default_src(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and is_blank(value)):
            return KEYWORD_NONE
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Optional[str]]) -> "PolicyConfig":
        """Build a config from hyphenated option keys; unknown keys are ignored."""
        known = {
            field.alias or name
            for name, field in cls.model_fields.items()
        }
        return cls.model_validate({key: value for key, value in options.items() if key in known})
