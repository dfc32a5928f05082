# csp_filter/core/config.py

from __future__ import annotations

import logging
import warnings
from typing import Dict, Optional

from pydantic_settings import BaseSettings

from csp_filter.schemas import PolicyConfig, is_blank

logger = logging.getLogger(__name__)

# ── Option keys and the settings fields that carry them ──
POLICY_OPTION_FIELDS = {
    "report-only": "CSP_REPORT_ONLY",
    "report-uri": "CSP_REPORT_URI",
    "sandbox": "CSP_SANDBOX",
    "default-src": "CSP_DEFAULT_SRC",
    "img-src": "CSP_IMG_SRC",
    "script-src": "CSP_SCRIPT_SRC",
    "style-src": "CSP_STYLE_SRC",
    "font-src": "CSP_FONT_SRC",
    "connect-src": "CSP_CONNECT_SRC",
    "object-src": "CSP_OBJECT_SRC",
    "media-src": "CSP_MEDIA_SRC",
    "frame-src": "CSP_FRAME_SRC",
}


class Settings(BaseSettings):
    PROJECT_NAME: str = "CSP Filter"
    PROJECT_VERSION: str = "1.0.0"

    # ── Environment mode  (development | production) ──
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ── Violation report endpoint ──
    CSP_REPORT_PATH: str = "/csp-report"

    # ── Policy directives (raw option values) ──
    CSP_REPORT_ONLY: Optional[str] = None
    CSP_REPORT_URI: Optional[str] = None
    CSP_SANDBOX: Optional[str] = None
    CSP_DEFAULT_SRC: Optional[str] = None
    CSP_IMG_SRC: Optional[str] = None
    CSP_SCRIPT_SRC: Optional[str] = None
    CSP_STYLE_SRC: Optional[str] = None
    CSP_FONT_SRC: Optional[str] = None
    CSP_CONNECT_SRC: Optional[str] = None
    CSP_OBJECT_SRC: Optional[str] = None
    CSP_MEDIA_SRC: Optional[str] = None
    CSP_FRAME_SRC: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    # ── helpers ──
    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower().strip() == "production"

    def policy_options(self) -> Dict[str, Optional[str]]:
        """Return the directive settings keyed by their option names."""
        return {key: getattr(self, field) for key, field in POLICY_OPTION_FIELDS.items()}

    def policy_config(self) -> PolicyConfig:
        return PolicyConfig.from_options(self.policy_options())

    # ── Startup validation ──
    def validate_policy(self) -> None:
        """
        Point out configurations that are legal but probably unintended.
        Only warns; the policy is always served exactly as configured.
        """
        warns: list[str] = []
        config = self.policy_config()

        if config.report_only and is_blank(config.report_uri):
            warns.append(
                "CSP_REPORT_ONLY is set without CSP_REPORT_URI: "
                "violations are neither blocked nor reported."
            )

        if self.is_production and config.default_src.strip() == "*":
            warns.append("CSP_DEFAULT_SRC is '*' in production mode: any origin may serve content.")

        for w in warns:
            logger.warning("[CSP] %s", w)
            warnings.warn(f"[CSP] {w}", stacklevel=2)


settings = Settings()
settings.validate_policy()
