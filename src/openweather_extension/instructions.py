import os

import yaml

from openweather_extension.schemas.extension import ResolvedConfig


def instructions(default_location: str, config: ResolvedConfig) -> str:
    """Render the model instructions from instructions.md with the YAML context block."""
    template_path = os.path.join(os.path.dirname(__file__), "instructions.md")
    with open(template_path, "r", encoding="utf-8") as f:
        content = f.read().strip()

    context = {
        "defaultLocation": default_location,
        "output": {name: field.model_dump() for name, field in config.output.items()},
    }
    # Unbounded width keeps every value on one line, verbatim
    rendered = yaml.safe_dump(
        context, sort_keys=False, allow_unicode=True, width=float("inf")
    ).strip()

    return content.replace("{{context}}", rendered)
