"""gatling-scaffold configuration.

Holds the documented defaults applied when a value is left empty at an
interactive prompt or omitted from the command line.  Defaults can be
overridden per environment through ``GATLING_SCAFFOLD_*`` variables and
persisted to / loaded from JSON.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

ENV_PREFIX = "GATLING_SCAFFOLD_"


class Config(BaseModel):
    """Default values for a new project.

    ``build_tool`` is left unset by default so that each language falls back
    to the first build tool listed for it in the configuration matrix.
    """

    name: str = Field(default="my-perf-tests", description="Project name")
    language: str = Field(default="java")
    build_tool: str | None = Field(
        default=None, description="Defaults to the language's preferred build tool"
    )
    namespace: str = Field(default="perf", description="Base package (JVM only)")
    simulation: str = Field(default="ApiSimulation", description="Simulation class name")
    base_url: str = Field(default="https://api.example.com")
    users: int = Field(default=10, ge=1, description="Default concurrent user count")
    output_dir: Path = Field(default=Path("."))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GATLING_SCAFFOLD_NAME, GATLING_SCAFFOLD_LANGUAGE,
            GATLING_SCAFFOLD_BUILD_TOOL, GATLING_SCAFFOLD_NAMESPACE,
            GATLING_SCAFFOLD_SIMULATION, GATLING_SCAFFOLD_BASE_URL,
            GATLING_SCAFFOLD_USERS, GATLING_SCAFFOLD_OUTPUT_DIR.
        """
        kwargs: dict[str, Any] = {}
        for field in ("name", "language", "build_tool", "namespace", "simulation", "base_url"):
            value = os.environ.get(ENV_PREFIX + field.upper())
            if value:
                kwargs[field] = value
        if os.environ.get(ENV_PREFIX + "USERS"):
            kwargs["users"] = int(os.environ[ENV_PREFIX + "USERS"])
        if os.environ.get(ENV_PREFIX + "OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ[ENV_PREFIX + "OUTPUT_DIR"])
        return cls(**kwargs)
