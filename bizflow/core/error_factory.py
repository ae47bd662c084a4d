"""Error Factory - localized construction of validation, system and composite errors.

Invariants:
    - A missing or blank template never fails construction: the key becomes the message
    - error.code is always the message key that was looked up
    - build_composite_error keeps every child, in order; callers guarantee a non-empty list
    - FILE storage reads MessageSource ({0} placeholders); DB storage reads
      ConfigSource under error.message.<key>[.<lang>-<country>] (%s placeholders)

Design Decisions:
    - Sources injected via boundary_protocols: the factory itself does no IO
    - new_multi_* accept None/empty lists and wrap nothing; the orchestrator
      only calls build_composite_error once it has at least one failure
"""

from dataclasses import dataclass
from typing import Sequence

from bizflow.core.boundary_protocols import ConfigSource, MessageSource
from bizflow.core.domain_types import Locale, MessageStorageType, ModuleId
from bizflow.core.errors import (
    ComponentError,
    CompositeError,
    CompositeValidationError,
    ErrorContext,
    SystemFaultError,
    ValidationError,
)
from bizflow.core.message_format import (
    config_message_key,
    format_indexed,
    format_printf,
)
from bizflow.core.string_format import is_null_or_blank


def build_composite_error(
    module: ModuleId, errors: Sequence[ComponentError],
) -> CompositeError:
    """Merge component errors into one CompositeError scoped to module."""
    return CompositeError(module, errors)


@dataclass
class ErrorInfo:
    """Fluent description of a field-level validation error."""
    key: str
    field: str | None = None
    params: tuple = ()

    def with_field(self, field_name: str, info: str | None = None) -> "ErrorInfo":
        """Attach the offending field; extra info is appended as "field|info"."""
        self.field = field_name if is_null_or_blank(info) else f"{field_name}|{info}"
        return self

    def with_params(self, *params: object) -> "ErrorInfo":
        self.params = params
        return self


class ErrorFactory:
    """Builds module-scoped errors with messages resolved for a locale."""

    def __init__(
        self,
        messages: MessageSource,
        config: ConfigSource | None = None,
        default_storage: MessageStorageType = MessageStorageType.FILE,
    ):
        self._messages = messages
        self._config = config
        self._default_storage = default_storage

    # ─── Validation errors ─────────────────────────────────────

    def new_validation_error(
        self,
        module: ModuleId,
        locale: Locale,
        key: str,
        *values: object,
        storage: MessageStorageType | None = None,
    ) -> ValidationError:
        storage = storage or self._default_storage
        if storage.is_db():
            message = self._config_message(module, locale, key, values)
        else:
            message = self._bundle_message(module, locale, key, values)
        return ValidationError(
            module, message, key, self._context(locale, values=values),
        )

    def new_validation_error_from_info(
        self, module: ModuleId, locale: Locale, info: ErrorInfo,
    ) -> ValidationError:
        message = self._bundle_message(module, locale, info.key, info.params)
        ctx = self._context(locale, values=info.params, error_field=info.field)
        return ValidationError(module, message, info.key, ctx)

    def new_multi_validation_error(
        self, module: ModuleId, errors: Sequence[ComponentError] | None,
    ) -> CompositeValidationError:
        return CompositeValidationError(module, errors or ())

    # ─── System errors ─────────────────────────────────────────

    def new_system_error(
        self,
        module: ModuleId,
        locale: Locale,
        key: str,
        *values: object,
        cause: BaseException | None = None,
    ) -> SystemFaultError:
        message = self._bundle_message(module, locale, key, values)
        return SystemFaultError(
            module, message, key, self._context(locale, values=values), cause=cause,
        )

    def new_multi_system_error(
        self, module: ModuleId, errors: Sequence[ComponentError] | None,
    ) -> CompositeError:
        return build_composite_error(module, errors or ())

    # ─── Message resolution ────────────────────────────────────

    def _bundle_message(
        self, module: ModuleId, locale: Locale, key: str, values: Sequence[object],
    ) -> str:
        template = self._messages.get_template(module, locale, key)
        if template is None:
            return key
        return format_indexed(template, values)

    def _config_message(
        self, module: ModuleId, locale: Locale, key: str, values: Sequence[object],
    ) -> str:
        if self._config is None:
            return key
        template = self._config.get_property(module, config_message_key(key, locale))
        if is_null_or_blank(template):
            return key
        return format_printf(template, values)

    @staticmethod
    def _context(
        locale: Locale,
        values: Sequence[object] = (),
        error_field: str | None = None,
    ) -> ErrorContext:
        return ErrorContext(
            locale=str(locale), params=tuple(values), error_field=error_field,
        )
