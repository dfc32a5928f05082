# tests/test_policy.py
"""Header value assembly and header name selection."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from csp_filter.core.policy import (
    CONTENT_SECURITY_POLICY_HEADER,
    CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER,
    KEYWORD_SELF,
    build_policy,
    header_name,
)
from csp_filter.schemas import PolicyConfig

DEFAULT_HEADER_VALUE = "default-src 'none'"
REPORT_URL = "/testReportUrl"


def _policy(**options) -> str:
    return build_policy(PolicyConfig.from_options(options))


def test_empty_config_yields_default_none() -> None:
    assert build_policy(PolicyConfig()) == DEFAULT_HEADER_VALUE
    assert _policy() == DEFAULT_HEADER_VALUE


def test_default_src_self() -> None:
    assert _policy(**{"default-src": KEYWORD_SELF}) == "default-src 'self'"


@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_default_src_falls_back_to_none(blank) -> None:
    assert _policy(**{"default-src": blank}) == DEFAULT_HEADER_VALUE


def test_img_src() -> None:
    policy = _policy(**{"default-src": KEYWORD_SELF, "img-src": "static.example.com"})
    assert policy == "default-src 'self'; img-src static.example.com"


def test_script_src_with_default_none() -> None:
    policy = _policy(**{"script-src": "'self' js.example.com"})
    assert policy == "default-src 'none'; script-src 'self' js.example.com"


def test_media_src() -> None:
    policy = _policy(**{"default-src": KEYWORD_SELF, "media-src": "static.example.com"})
    assert policy == "default-src 'self'; media-src static.example.com"


def test_report_uri() -> None:
    assert _policy(**{"report-uri": REPORT_URL}) == f"{DEFAULT_HEADER_VALUE}; report-uri {REPORT_URL}"


def test_directive_equal_to_default_is_omitted() -> None:
    policy = _policy(**{
        "default-src": KEYWORD_SELF,
        "img-src": KEYWORD_SELF,
        "style-src": KEYWORD_SELF,
        "font-src": "fonts.example.com",
    })
    assert policy == "default-src 'self'; font-src fonts.example.com"


def test_directive_comparison_with_default_is_exact() -> None:
    policy = _policy(**{"default-src": KEYWORD_SELF, "img-src": "'SELF'"})
    assert policy == "default-src 'self'; img-src 'SELF'"


@pytest.mark.parametrize("blank", ["", " ", "\t"])
def test_blank_directives_are_omitted(blank: str) -> None:
    policy = _policy(**{"img-src": blank, "report-uri": blank, "sandbox": blank})
    assert policy == DEFAULT_HEADER_VALUE


@pytest.mark.parametrize("value", ["true", "TRUE", "True"])
def test_sandbox_true_has_no_value(value: str) -> None:
    assert _policy(sandbox=value) == f"{DEFAULT_HEADER_VALUE}; sandbox"


def test_sandbox_allow_scripts() -> None:
    assert _policy(sandbox="allow-scripts") == f"{DEFAULT_HEADER_VALUE}; sandbox allow-scripts"


def test_sandbox_with_several_flags() -> None:
    policy = _policy(sandbox="allow-forms allow-same-origin")
    assert policy == f"{DEFAULT_HEADER_VALUE}; sandbox allow-forms allow-same-origin"


def test_full_directive_order() -> None:
    policy = _policy(**{
        "sandbox": "allow-forms",
        "report-uri": "/r",
        "frame-src": "frames.example.com",
        "media-src": "media.example.com",
        "object-src": "objects.example.com",
        "connect-src": "api.example.com",
        "font-src": "fonts.example.com",
        "style-src": "css.example.com",
        "script-src": "js.example.com",
        "img-src": "img.example.com",
        "default-src": KEYWORD_SELF,
    })
    assert policy == (
        "default-src 'self'; "
        "img-src img.example.com; "
        "script-src js.example.com; "
        "style-src css.example.com; "
        "font-src fonts.example.com; "
        "connect-src api.example.com; "
        "object-src objects.example.com; "
        "media-src media.example.com; "
        "frame-src frames.example.com; "
        "report-uri /r; "
        "sandbox allow-forms"
    )


def test_values_are_not_validated_or_escaped() -> None:
    policy = _policy(**{"img-src": "not a ; real source"})
    assert policy == "default-src 'none'; img-src not a ; real source"


class TestHeaderName:
    def test_enforcing_by_default(self) -> None:
        assert header_name(PolicyConfig()) == CONTENT_SECURITY_POLICY_HEADER

    @pytest.mark.parametrize("value", ["true", "TRUE", "tRuE"])
    def test_report_only(self, value: str) -> None:
        config = PolicyConfig.from_options({"report-only": value})
        assert header_name(config) == CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER

    @pytest.mark.parametrize("value", ["false", "yes", "1", "", None])
    def test_anything_but_true_enforces(self, value) -> None:
        config = PolicyConfig.from_options({"report-only": value})
        assert header_name(config) == CONTENT_SECURITY_POLICY_HEADER

    def test_report_only_with_report_uri(self) -> None:
        config = PolicyConfig.from_options({"report-only": "true", "report-uri": "/r"})
        assert header_name(config) == CONTENT_SECURITY_POLICY_REPORT_ONLY_HEADER
        assert build_policy(config) == "default-src 'none'; report-uri /r"


class TestPolicyConfig:
    def test_field_names_and_aliases_both_accepted(self) -> None:
        by_alias = PolicyConfig.from_options({"img-src": "a.example.com"})
        by_name = PolicyConfig(img_src="a.example.com")
        assert by_alias == by_name

    def test_unknown_options_are_ignored(self) -> None:
        config = PolicyConfig.from_options({"base-uri": "'self'", "img-src": "a.example.com"})
        assert build_policy(config) == "default-src 'none'; img-src a.example.com"

    def test_config_is_immutable(self) -> None:
        config = PolicyConfig()
        with pytest.raises(ValidationError):
            config.default_src = "'self'"

    def test_values_are_kept_verbatim(self) -> None:
        config = PolicyConfig.from_options({"script-src": " 'self' "})
        assert config.script_src == " 'self' "
