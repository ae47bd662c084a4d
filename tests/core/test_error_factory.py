"""Error Factory - localized message resolution and composite construction.

Tests cover:
    - FILE storage formats {0} templates from the message source
    - DB storage reads error.message.<key>[.<locale>] with %s templates
    - Missing or blank templates fall back to the key
    - ErrorInfo carries field and params
    - build_composite_error keeps order and duplicates
"""

from bizflow.core.domain_types import Locale, MessageStorageType, ModuleId
from bizflow.core.error_factory import ErrorFactory, ErrorInfo, build_composite_error
from bizflow.core.errors import (
    CompositeError, CompositeValidationError, SystemFaultError, ValidationError,
)

MODULE = ModuleId("pc.billing")
EN_US = Locale("en", "US")
ZH_CN = Locale("zh", "CN")


class DictMessages:
    def __init__(self, templates: dict[tuple[str, str], str]):
        self._templates = templates

    def get_template(self, module, locale, key):
        return self._templates.get((str(locale), key))


class DictConfig:
    def __init__(self, props: dict[str, str]):
        self._props = props

    def get_property(self, module, key):
        return self._props.get(key)


def _factory(config: dict[str, str] | None = None) -> ErrorFactory:
    messages = DictMessages({
        ("en_US", "BIL_AMT_00001"): "Amount {0} exceeds limit {1}",
        ("zh_CN", "BIL_AMT_00001"): "金额 {0} 超过上限 {1}",
        ("en_US", "SYS_DB_00001"): "Ledger {0} unavailable",
    })
    return ErrorFactory(messages, DictConfig(config or {}))


# ─── FILE storage ────────────────────────────────────────────────

def test_validation_error_uses_bundle_template():
    err = _factory().new_validation_error(MODULE, EN_US, "BIL_AMT_00001", 120, 100)
    assert isinstance(err, ValidationError)
    assert err.message == "Amount 120 exceeds limit 100"
    assert err.code == "BIL_AMT_00001"
    assert err.module == MODULE
    assert err.context.locale == "en_US"
    assert err.context.params == (120, 100)


def test_validation_error_localized():
    err = _factory().new_validation_error(MODULE, ZH_CN, "BIL_AMT_00001", 5, 1)
    assert err.message == "金额 5 超过上限 1"


def test_missing_template_falls_back_to_key():
    err = _factory().new_validation_error(MODULE, EN_US, "BIL_UNKNOWN_00009")
    assert err.message == "BIL_UNKNOWN_00009"
    assert err.code == "BIL_UNKNOWN_00009"


def test_system_error_keeps_cause():
    cause = ConnectionError("refused")
    err = _factory().new_system_error(MODULE, EN_US, "SYS_DB_00001", "GL", cause=cause)
    assert isinstance(err, SystemFaultError)
    assert err.message == "Ledger GL unavailable"
    assert err.__cause__ is cause


def test_error_info_carries_field_and_params():
    info = ErrorInfo("BIL_AMT_00001").with_field("amount", "row 3").with_params(7, 5)
    err = _factory().new_validation_error_from_info(MODULE, EN_US, info)
    assert err.message == "Amount 7 exceeds limit 5"
    assert err.field == "amount|row 3"


def test_error_info_blank_info_keeps_plain_field():
    info = ErrorInfo("K").with_field("amount", "  ")
    assert info.field == "amount"


# ─── DB storage ──────────────────────────────────────────────────

def test_db_storage_default_locale_uses_bare_key():
    factory = _factory({"error.message.BIL_QTY_00002": "Quantity %s is invalid"})
    err = factory.new_validation_error(
        MODULE, Locale("en", "SG"), "BIL_QTY_00002", 3,
        storage=MessageStorageType.DB,
    )
    assert err.message == "Quantity 3 is invalid"


def test_db_storage_other_locale_uses_suffixed_key():
    factory = _factory({"error.message.BIL_QTY_00002.zh-cn": "数量 %s 无效"})
    err = factory.new_validation_error(
        MODULE, ZH_CN, "BIL_QTY_00002", 3, storage=MessageStorageType.DB,
    )
    assert err.message == "数量 3 无效"


def test_db_storage_blank_template_falls_back_to_key():
    factory = _factory({"error.message.BIL_QTY_00002": "   "})
    err = factory.new_validation_error(
        MODULE, EN_US, "BIL_QTY_00002", storage=MessageStorageType.DB,
    )
    assert err.message == "BIL_QTY_00002"


def test_db_storage_ignores_surplus_values():
    factory = _factory({"error.message.BIL_QTY_00002": "Amount %s invalid"})
    err = factory.new_validation_error(
        MODULE, EN_US, "BIL_QTY_00002", 1, 2, storage=MessageStorageType.DB,
    )
    assert err.message == "Amount 1 invalid"
    assert err.context.params == (1, 2)


def test_db_storage_template_without_placeholder():
    factory = _factory({"error.message.BIL_QTY_00002": "Amount invalid"})
    err = factory.new_validation_error(
        MODULE, EN_US, "BIL_QTY_00002", 1, storage=MessageStorageType.DB,
    )
    assert err.message == "Amount invalid"


def test_default_storage_applies_when_unspecified():
    factory = ErrorFactory(
        DictMessages({}),
        DictConfig({"error.message.K": "from config"}),
        default_storage=MessageStorageType.DB,
    )
    assert factory.new_validation_error(MODULE, EN_US, "K").message == "from config"


# ─── Composites ──────────────────────────────────────────────────

def test_build_composite_error_keeps_order_and_duplicates():
    a = ValidationError(MODULE, "a", "A")
    b = SystemFaultError(MODULE, "b", "B")
    composite = build_composite_error(MODULE, [a, b, a])
    assert isinstance(composite, CompositeError)
    assert composite.errors == (a, b, a)


def test_new_multi_errors_accept_none():
    factory = _factory()
    assert len(factory.new_multi_system_error(MODULE, None)) == 0
    multi = factory.new_multi_validation_error(MODULE, None)
    assert isinstance(multi, CompositeValidationError)
    assert len(multi) == 0
