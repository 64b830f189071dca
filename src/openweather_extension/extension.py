import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

import httpx

import openweather_extension.integrations.openweather as openweather_client
from openweather_extension.config import settings
from openweather_extension.function_wrapper import safe_function
from openweather_extension.instructions import instructions as render_instructions
from openweather_extension.resolver import resolve_config
from openweather_extension.schemas.extension import (
    ExtensionManifest,
    ExtensionTables,
    Parameter,
    ResolvedConfig,
)

HostFunction = Callable[..., Awaitable[Any]]


class Extension(ABC):
    """Plugin contract of the host conversational runtime.

    The host reads the manifest and parameters, fires the refresh event on
    startup and after every parameter change, puts the instructions in the
    model's system prompt and calls the functions described by the function
    schemas. Failures are reported through last_error.
    """

    def __init__(self, manifest: ExtensionManifest, parameters: list[Parameter]):
        self.manifest = manifest
        self.parameters = {parameter.name: parameter for parameter in parameters}
        self.last_error: str | None = None

    @property
    @abstractmethod
    def instructions(self) -> str: ...

    @property
    @abstractmethod
    def function_schemas(self) -> list[dict[str, Any]]: ...

    @property
    @abstractmethod
    def functions(self) -> dict[str, HostFunction]: ...

    @abstractmethod
    def refresh(self) -> None:
        """Recompute derived state from the current parameter values."""

    def bootstrap(self) -> None:
        self.refresh()

    def parameter(self, name: str) -> Parameter:
        return self.parameters[name]

    def configure(self, values: dict[str, str | None]) -> None:
        """Apply new parameter values, then fire the refresh event."""
        for name, value in values.items():
            if name not in self.parameters:
                raise KeyError(f"Unknown parameter: {name}")
            self.parameters[name].value = value

        self.refresh()


def build_parameters(tables: ExtensionTables) -> list[Parameter]:
    config = settings.parameters

    return [
        Parameter(
            name="API_KEY",
            description=config.api_key.description,
            type="password",
        ),
        Parameter(
            name="DEFAULT_LOCATION",
            description=config.default_location.description,
            possible_values=list(config.default_location.possible_values),
        ),
        Parameter(
            name="LANGUAGE",
            description=config.language.description,
            type="select",
            default_value=config.language.default_value,
            available_values=list(tables.languages.values()),
        ),
        Parameter(
            name="TEMPERATURE_UNIT",
            description=config.temperature_unit.description,
            type="select",
            default_value=config.temperature_unit.default_value,
            available_values=list(tables.units.values()),
        ),
    ]


class OpenWeatherExtension(Extension):
    """Current weather and 5 day forecasts from OpenWeatherMap."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        tables: ExtensionTables,
        logger: logging.Logger | None = None,
    ):
        super().__init__(
            ExtensionManifest.model_validate(dict(settings.extension)),
            build_parameters(tables),
        )
        self.client = client
        self.tables = tables
        self.logger = logger or logging.getLogger(__name__)
        self.config = ResolvedConfig()
        self._instructions = ""

    @property
    def instructions(self) -> str:
        return self._instructions

    @property
    def function_schemas(self) -> list[dict[str, Any]]:
        return [schema.model_dump() for schema in self.tables.function_schemas]

    @property
    def functions(self) -> dict[str, HostFunction]:
        return {
            "get_weather": self.get_weather,
            "get_forecast": self.get_forecast,
        }

    def refresh(self) -> None:
        # Replaced whole so in-flight requests keep a consistent snapshot
        self.config = resolve_config(
            self.tables,
            self.parameter("LANGUAGE").get_value(),
            self.parameter("TEMPERATURE_UNIT").get_value(),
            previous=self.config,
            logger=self.logger,
        )
        self._instructions = render_instructions(
            self.parameter("DEFAULT_LOCATION").get_value(), self.config
        )

    @safe_function
    async def get_weather(
        self, city: str, state: str | None = None, country: str | None = None
    ) -> Any:
        return await self._request("weather", city, state, country)

    @safe_function
    async def get_forecast(
        self, city: str, state: str | None = None, country: str | None = None
    ) -> Any:
        return await self._request("forecast", city, state, country)

    async def _request(
        self, endpoint: str, city: str, state: str | None, country: str | None
    ) -> Any:
        if not city:
            raise ValueError("A city is required")

        config = self.config
        location = openweather_client.location_query(city, state, country)
        self.logger.info("Requesting %s for %s", endpoint, location)

        return await openweather_client.request(
            self.client,
            endpoint,
            location,
            lang=config.lang,
            units=config.unit,
            api_key=self.parameter("API_KEY").get_value(),
        )
