from pydantic_ai import Agent
from pydantic_ai.tools import RunContext

from openweather_extension.config import settings
from openweather_extension.assistant.dependencies import AssistantDependencies
from openweather_extension.assistant.tools.weather import weather_tools
from openweather_extension.schemas.extension import ExtensionTables


def create_assistant(
    model: str | None = None,
    tables: ExtensionTables | None = None,
    dependencies_type: type[AssistantDependencies] = AssistantDependencies,
) -> Agent[AssistantDependencies, str]:
    """Create a weather assistant agent hosting the extension.

    Tools come from the same function schemas the extension declares to its host.
    """
    tables = tables or ExtensionTables.load()

    agent = Agent(
        model or settings.assistant.model,
        deps_type=dependencies_type,
        tools=weather_tools(tables.function_schemas),
    )

    @agent.system_prompt(dynamic=True)
    def extension_instructions(ctx: RunContext[AssistantDependencies]) -> str:
        # Re-read on every run so refreshed parameters are picked up
        return ctx.deps.extension.instructions

    return agent
