# csp_filter/core/policy.py
"""
Content-Security-Policy header assembly.

See https://www.w3.org/TR/CSP/#directives for what each directive means.
Values are emitted as configured: no syntax checks, no escaping.
"""

from __future__ import annotations

from typing import Optional

from csp_filter.schemas import KEYWORD_NONE, KEYWORD_SELF, PolicyConfig, is_blank

CONTENT_SECURITY_POLICY_HEADER = "Content-Security-Policy"
CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER = "Content-Security-Policy-Report-Only"

# ── Directive names ──
REPORT_URI = "report-uri"
SANDBOX = "sandbox"
DEFAULT_SRC = "default-src"
IMG_SRC = "img-src"
SCRIPT_SRC = "script-src"
STYLE_SRC = "style-src"
FONT_SRC = "font-src"
CONNECT_SRC = "connect-src"
OBJECT_SRC = "object-src"
MEDIA_SRC = "media-src"
FRAME_SRC = "frame-src"

# Emission order after default-src; sandbox always comes last.
_ORDERED_DIRECTIVES = (
    (IMG_SRC, "img_src"),
    (SCRIPT_SRC, "script_src"),
    (STYLE_SRC, "style_src"),
    (FONT_SRC, "font_src"),
    (CONNECT_SRC, "connect_src"),
    (OBJECT_SRC, "object_src"),
    (MEDIA_SRC, "media_src"),
    (FRAME_SRC, "frame_src"),
    (REPORT_URI, "report_uri"),
)

__all__ = [
    "CONTENT_SECURITY_POLICY_HEADER",
    "CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER",
    "KEYWORD_NONE",
    "KEYWORD_SELF",
    "build_policy",
    "header_name",
]


def header_name(config: PolicyConfig) -> str:
    if config.report_only:
        return CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER
    return CONTENT_SECURITY_POLICY_HEADER


def _directive(name: str, value: Optional[str], default_src: str) -> Optional[str]:
    # Directives repeating default-src are redundant.
    if is_blank(value) or value == default_src:
        return None
    return f"{name} {value}"


def _sandbox_directive(value: Optional[str]) -> Optional[str]:
    if is_blank(value):
        return None
    if value.lower() == "true":
        return SANDBOX
    return f"{SANDBOX} {value}"


def build_policy(config: PolicyConfig) -> str:
    """
    Assemble the header value for ``config``.

    The result always starts with ``default-src``; the remaining directives
    follow in a fixed order so the output is stable for a given config:
    img-src, script-src, style-src, font-src, connect-src, object-src,
    media-src, frame-src, report-uri, sandbox.
    """
    parts = [f"{DEFAULT_SRC} {config.default_src}"]

    for name, attr in _ORDERED_DIRECTIVES:
        directive = _directive(name, getattr(config, attr), config.default_src)
        if directive:
            parts.append(directive)

    sandbox = _sandbox_directive(config.sandbox)
    if sandbox:
        parts.append(sandbox)

    return "; ".join(parts)
