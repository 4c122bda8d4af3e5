"""api-gen configuration.

Typed settings for the CLI. Values are Pydantic v2 models so they are
validated at construction time and can be overridden from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

USAGE_FILENAME = ".api-generator-usage.json"


def default_usage_file() -> Path:
    """Per-user usage record location (``~/.api-generator-usage.json``)."""
    return Path.home() / USAGE_FILENAME


class Config(BaseModel):
    """Global api-gen configuration.

    Created once by the CLI entry point and passed to the usage store and the
    project generator.
    """

    usage_file: Path = Field(
        default_factory=default_usage_file,
        description="JSON file holding the free-tier usage record",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Parent directory where generated projects are created",
    )
    default_template: str = Field(default="basic")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            API_GEN_USAGE_FILE, API_GEN_OUTPUT_DIR, API_GEN_DEFAULT_TEMPLATE.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("API_GEN_USAGE_FILE"):
            kwargs["usage_file"] = Path(os.environ["API_GEN_USAGE_FILE"]).expanduser()
        if os.environ.get("API_GEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["API_GEN_OUTPUT_DIR"]).expanduser()
        if os.environ.get("API_GEN_DEFAULT_TEMPLATE"):
            kwargs["default_template"] = os.environ["API_GEN_DEFAULT_TEMPLATE"]
        return cls(**kwargs)
