"""Message Sources - file-backed implementations of MessageSource and ConfigSource.

Invariants:
    - Bundle lookup walks the locale fallback chain: _zh_CN, _zh, then the base bundle
    - A key absent from every candidate bundle resolves to None (factory falls back to key)
    - Config lookups never raise for a missing module file or key
"""

from pathlib import Path

from bizflow.config import Settings
from bizflow.core.domain_types import Locale, ModuleId
from bizflow.core.error_factory import ErrorFactory
from bizflow.core.message_format import bundle_candidates, format_printf
from bizflow.infrastructure.properties import PropertiesLoader


class BundleMessageSource:
    """Resource bundles: <bundle_dir>/<module_with_underscores>[_lang[_COUNTRY]].properties."""

    def __init__(self, bundle_dir: str | Path, loader: PropertiesLoader | None = None):
        self._bundle_dir = Path(bundle_dir)
        self._loader = loader or PropertiesLoader()

    def get_template(
        self, module: ModuleId, locale: Locale, key: str,
    ) -> str | None:
        for name in bundle_candidates(module, locale):
            bundle = self._loader.load_optional(self._bundle_dir / f"{name}.properties")
            if bundle is not None and key in bundle:
                return bundle[key]
        return None

    def get_message(
        self, module: ModuleId, locale: Locale, key: str, *values: object,
    ) -> str:
        """printf-style message straight from the bundle; KeyError when absent."""
        template = self.get_template(module, locale, key)
        if template is None:
            raise KeyError(f"Can't find resource for bundle {module}, key {key}")
        return format_printf(template, values)


class PropertiesConfigSource:
    """Per-module configuration: <config_dir>/<module>.properties."""

    def __init__(self, config_dir: str | Path, loader: PropertiesLoader | None = None):
        self._config_dir = Path(config_dir)
        self._loader = loader or PropertiesLoader()

    def get_property(self, module: ModuleId, key: str) -> str | None:
        props = self._loader.load_optional(self._config_dir / f"{module}.properties")
        if props is None:
            return None
        return props.get(key)

    def get_property_list(
        self, module: ModuleId, key: str, sep: str = ",",
    ) -> list[str]:
        """Comma-separated property as a list of stripped, non-empty items."""
        value = self.get_property(module, key)
        if not value:
            return []
        return [item.strip() for item in value.split(sep) if item.strip()]


def sources_from_settings(
    settings: Settings,
) -> tuple[BundleMessageSource, PropertiesConfigSource]:
    """Both sources wired to the configured directories with one shared cache."""
    loader = PropertiesLoader()
    return (
        BundleMessageSource(settings.message_bundle_dir, loader),
        PropertiesConfigSource(settings.config_dir, loader),
    )


def error_factory_from_settings(settings: Settings) -> ErrorFactory:
    """ErrorFactory over the configured sources, defaulting to settings.message_storage."""
    messages, config = sources_from_settings(settings)
    return ErrorFactory(messages, config, default_storage=settings.message_storage)
