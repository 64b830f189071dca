from dataclasses import dataclass
import logging

from openweather_extension.extension import OpenWeatherExtension


@dataclass
class AssistantDependencies:
    """Dependencies for the weather assistant agent."""

    extension: OpenWeatherExtension
    logger: logging.Logger
