"""Test utilities and shared mocks."""

from typing import Callable

import httpx

from openweather_extension.extension import OpenWeatherExtension
from openweather_extension.schemas.extension import ExtensionTables

BASE_URL = "https://api.openweathermap.org/data/2.5/"


class MockLogger:
    """Mock logger that accepts the logging.Logger calls used by the extension."""

    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass
    def error(self, *args, **kwargs): pass
    def exception(self, *args, **kwargs): pass


def create_extension(
    handler: Callable[[httpx.Request], httpx.Response],
    parameter_values: dict[str, str | None] | None = None,
    logger=None,
) -> OpenWeatherExtension:
    """Build a bootstrapped extension whose HTTP client answers with handler."""
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=BASE_URL,
    )
    extension = OpenWeatherExtension(client, ExtensionTables.load(), logger or MockLogger())
    extension.configure(parameter_values or {})
    return extension


def yaml_block(instructions: str) -> str:
    """Extract the fenced YAML context block from rendered instructions."""
    return instructions.split("``` yaml\n", 1)[1].split("\n```", 1)[0]
