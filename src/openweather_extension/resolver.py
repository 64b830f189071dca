import logging

from openweather_extension.schemas.extension import (
    ExtensionTables,
    ResolvedConfig,
    ResolvedOutput,
)

default_logger = logging.getLogger(__name__)


def find_code(table: dict[str, str], display_name: str) -> str | None:
    """Return the first code whose display name matches, or None"""
    return next((code for code, name in table.items() if name == display_name), None)


def resolve_config(
    tables: ExtensionTables,
    language_name: str,
    unit_name: str,
    previous: ResolvedConfig | None = None,
    logger: logging.Logger = default_logger,
) -> ResolvedConfig:
    """Map the configured display names to provider codes.

    An unknown name keeps the code from the previous resolution, which starts
    out as "en" and "standard".
    """
    previous = previous or ResolvedConfig()

    lang = find_code(tables.languages, language_name)
    if lang is None:
        logger.warning("Unknown language %r, keeping %s", language_name, previous.lang)
        lang = previous.lang

    unit = find_code(tables.units, unit_name)
    if unit is None:
        logger.warning(
            "Unknown temperature unit %r, keeping %s", unit_name, previous.unit
        )
        unit = previous.unit

    output = {
        name: ResolvedOutput(description=field.description, unit=field.units.get(unit, ""))
        for name, field in tables.outputs.items()
    }

    logger.debug("Resolved lang=%s units=%s", lang, unit)

    return ResolvedConfig(unit=unit, lang=lang, output=output)
