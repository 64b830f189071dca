import pytest
from pydantic import ValidationError

from openweather_extension.schemas.extension import (
    ExtensionTables,
    OutputField,
    Parameter,
)


def test_packaged_tables_load():
    """Test the packaged tables pass startup validation."""
    tables = ExtensionTables.load()

    assert tables.languages["en"] == "English"
    assert tables.units == {
        "standard": "Kelvin",
        "metric": "Celsius",
        "imperial": "Fahrenheit",
    }
    assert list(tables.outputs)[0] == "temperature"
    assert [schema.name for schema in tables.function_schemas] == [
        "get_weather",
        "get_forecast",
    ]
    for schema in tables.function_schemas:
        assert schema.parameters["required"] == ["city"]


def test_every_output_has_a_label_per_unit_system():
    tables = ExtensionTables.load()

    for field in tables.outputs.values():
        assert set(tables.units) <= set(field.units)


def test_duplicate_display_name_fails_validation():
    with pytest.raises(ValidationError, match="Duplicate display name 'English'"):
        ExtensionTables(
            languages={"en": "English", "gb": "English"},
            units={"standard": "Kelvin"},
            outputs={},
            function_schemas=[],
        )


def test_missing_unit_label_fails_validation():
    with pytest.raises(ValidationError, match="no unit label for imperial"):
        ExtensionTables(
            languages={"en": "English"},
            units={"metric": "Celsius", "imperial": "Fahrenheit"},
            outputs={
                "temperature": OutputField(
                    description="Temperature", units={"metric": "°C"}
                )
            },
            function_schemas=[],
        )


def test_select_default_must_be_available():
    with pytest.raises(ValidationError):
        Parameter(
            name="LANGUAGE",
            type="select",
            default_value="Klingon",
            available_values=["English", "French"],
        )


def test_parameter_value_falls_back_to_default():
    parameter = Parameter(
        name="LANGUAGE",
        type="select",
        default_value="English",
        available_values=["English", "French"],
    )
    assert parameter.get_value() == "English"

    parameter.value = "French"
    assert parameter.get_value() == "French"

    parameter.value = ""
    assert parameter.get_value() == "English"

    assert Parameter(name="DEFAULT_LOCATION").get_value() == ""
