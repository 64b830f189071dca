from typing import Any, Awaitable, Callable

from pydantic_ai import Tool
from pydantic_ai.tools import RunContext

from openweather_extension.assistant.dependencies import AssistantDependencies
from openweather_extension.function_wrapper import ERROR_RESULT
from openweather_extension.schemas.extension import FunctionSchema


def _delegate(name: str) -> Callable[..., Awaitable[Any]]:
    async def call(ctx: RunContext[AssistantDependencies], **kwargs: Any) -> Any:
        result = await ctx.deps.extension.functions[name](**kwargs)
        if result == ERROR_RESULT:
            ctx.deps.logger.warning(
                "Tool '%s' returned an error: %s", name, ctx.deps.extension.last_error
            )
        return result

    return call


def weather_tools(
    function_schemas: list[FunctionSchema],
) -> list[Tool[AssistantDependencies]]:
    """Agent tools for the extension's functions, described by their JSON Schemas."""
    return [
        Tool.from_schema(
            _delegate(schema.name),
            name=schema.name,
            description=schema.description,
            json_schema=schema.parameters,
            takes_ctx=True,
        )
        for schema in function_schemas
    ]
