import json
import os
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

PACKAGE_DIR = os.path.dirname(os.path.dirname(__file__))

ParameterType = Literal["text", "password", "select"]


class Parameter(BaseModel):
    """A configuration parameter declared to the host"""

    name: str
    description: str = ""
    type: ParameterType = "text"
    default_value: str | None = None
    available_values: list[str] = Field(default_factory=list)  # Closed choice list for selects
    possible_values: list[str] = Field(default_factory=list)  # Suggestions for free text
    value: str | None = None

    @model_validator(mode="after")
    def check_default_value(self) -> Self:
        if (
            self.type == "select"
            and self.default_value is not None
            and self.default_value not in self.available_values
        ):
            raise ValueError(
                f"Default value {self.default_value!r} of {self.name} is not an available value"
            )
        return self

    def get_value(self) -> str:
        """Current value, falling back to the default value"""
        if self.value:
            return self.value
        return self.default_value or ""


class ExtensionManifest(BaseModel):
    name: str
    website: str
    category: str
    icon: str
    features: list[str]
    installation_steps: list[str]


class FunctionSchema(BaseModel):
    """JSON Schema of a function the language model may call"""

    name: str
    description: str
    parameters: dict[str, Any]


class OutputField(BaseModel):
    """A measurement field with its unit label for every unit system"""

    description: str
    units: dict[str, str]


class ResolvedOutput(BaseModel):
    description: str
    unit: str


class ResolvedConfig(BaseModel):
    """Provider codes and output units selected by the current parameters"""

    model_config = ConfigDict(frozen=True)

    unit: str = "standard"
    lang: str = "en"
    output: dict[str, ResolvedOutput] = Field(default_factory=dict)


class ExtensionTables(BaseModel):
    """Static lookup tables and function schemas, validated once at startup"""

    model_config = ConfigDict(frozen=True)

    languages: dict[str, str]  # Provider code -> display name
    units: dict[str, str]  # Provider code -> display name
    outputs: dict[str, OutputField]
    function_schemas: list[FunctionSchema]

    @model_validator(mode="after")
    def check_tables(self) -> Self:
        for table_name, table in (("languages", self.languages), ("units", self.units)):
            seen: set[str] = set()
            for display_name in table.values():
                if display_name in seen:
                    raise ValueError(
                        f"Duplicate display name {display_name!r} in {table_name}"
                    )
                seen.add(display_name)

        for field_name, field in self.outputs.items():
            missing = [unit for unit in self.units if unit not in field.units]
            if missing:
                raise ValueError(
                    f"Output {field_name!r} has no unit label for {', '.join(missing)}"
                )

        return self

    @classmethod
    def load(cls, base_dir: str = PACKAGE_DIR) -> "ExtensionTables":
        """Load the packaged JSON tables and function schemas"""

        def read(*parts: str) -> Any:
            with open(os.path.join(base_dir, *parts), "r", encoding="utf-8") as f:
                return json.load(f)

        return cls(
            languages=read("parameters", "languages.json"),
            units=read("parameters", "units.json"),
            outputs=read("parameters", "outputs.json"),
            function_schemas=[
                read("schemas", "functions", "get_weather.json"),
                read("schemas", "functions", "get_forecast.json"),
            ],
        )
