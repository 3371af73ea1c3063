"""uigen configuration.

Centralised, typed configuration for the generator. Settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from uigen.models import GenerationOptions

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class Config(BaseModel):
    """Global uigen configuration.

    Instances are typically created once by the CLI entry point or the
    :class:`uigen.api.UIGen` facade and then passed to the registry,
    resolver and generator.
    """

    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    max_concurrency: int = Field(
        default=4, ge=1, description="Maximum platforms generated concurrently"
    )
    read_timeout: float = Field(
        default=5.0, gt=0, description="Per-template file read timeout in seconds"
    )
    options: GenerationOptions = Field(default_factory=GenerationOptions)
    verbose: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path the file was written to.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            UIGEN_TEMPLATE_DIR, UIGEN_MAX_CONCURRENCY, UIGEN_READ_TIMEOUT,
            UIGEN_VERBOSE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("UIGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["UIGEN_TEMPLATE_DIR"])
        if os.environ.get("UIGEN_MAX_CONCURRENCY"):
            kwargs["max_concurrency"] = int(os.environ["UIGEN_MAX_CONCURRENCY"])
        if os.environ.get("UIGEN_READ_TIMEOUT"):
            kwargs["read_timeout"] = float(os.environ["UIGEN_READ_TIMEOUT"])
        verbose = os.environ.get("UIGEN_VERBOSE", "").strip().lower()
        kwargs["verbose"] = verbose in ("1", "true", "yes", "on")
        return cls(**kwargs)
