"""Domain Types - verifies locale parsing, policy defaults and sub-module predicates.

Tests:
    - Locale.parse accepts underscore and hyphen forms
    - Policy enums resolve None to their defaults
    - Only WEB_SERVICE / FRONT_END make a context rollback-eligible
    - ExecutionContext is immutable
"""

import dataclasses

import pytest

from bizflow.core.domain_types import (
    DEFAULT_LOCALE, ErrorHandlingPolicy, ExecutionContext, Locale, ModuleId,
    SubModuleKind, TransactionPolicy,
)


def test_module_id_wraps_str():
    assert ModuleId("pc.billing") == "pc.billing"


def test_locale_parse_underscore_and_hyphen():
    assert Locale.parse("zh_CN") == Locale("zh", "CN")
    assert Locale.parse("en-sg") == Locale("en", "SG")
    assert Locale.parse("FR") == Locale("fr", "")


def test_locale_tag_is_lower_case():
    assert Locale("zh", "CN").tag == "zh-cn"
    assert Locale("fr").tag == "fr"


def test_locale_bundle_suffixes_most_specific_first():
    assert Locale("zh", "CN").bundle_suffixes == ["_zh_CN", "_zh", ""]
    assert Locale("fr").bundle_suffixes == ["_fr", ""]


def test_default_locale_is_en_us():
    assert str(DEFAULT_LOCALE) == "en_US"


def test_transaction_policy_defaults_to_none():
    assert TransactionPolicy.resolve(None) is TransactionPolicy.NONE
    assert TransactionPolicy.resolve(TransactionPolicy.SUPPORT) is TransactionPolicy.SUPPORT


def test_error_handling_policy_defaults_to_group():
    assert ErrorHandlingPolicy.resolve(None) is ErrorHandlingPolicy.GROUP
    assert (
        ErrorHandlingPolicy.resolve(ErrorHandlingPolicy.FAIL_FAST)
        is ErrorHandlingPolicy.FAIL_FAST
    )


def test_sub_module_predicates():
    assert SubModuleKind.WEB_SERVICE.is_web_service()
    assert not SubModuleKind.WEB_SERVICE.is_front_end()
    assert SubModuleKind.FRONT_END.is_front_end()
    assert not SubModuleKind.BATCH.is_web_service()
    assert not SubModuleKind.BATCH.is_front_end()


@pytest.mark.parametrize("kind,eligible", [
    (None, False),
    (SubModuleKind.WEB_SERVICE, True),
    (SubModuleKind.FRONT_END, True),
    (SubModuleKind.BATCH, False),
    (SubModuleKind.SCHEDULER, False),
    (SubModuleKind.INTERFACE, False),
    (SubModuleKind.REPORT, False),
])
def test_rollback_eligibility(kind, eligible):
    ctx = ExecutionContext(ModuleId("pc.billing"), kind)
    assert ctx.rollback_eligible is eligible


def test_execution_context_is_frozen():
    ctx = ExecutionContext(ModuleId("pc.billing"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.module = ModuleId("other")  # type: ignore[misc]
