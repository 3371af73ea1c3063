"""Exception hierarchy for the uigen generation pipeline.

Every failure carries enough identity (component, platform, stage) for a
caller to build an actionable message without parsing the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Stage(str, Enum):
    """Pipeline stage a failure occurred in."""
    VALIDATE = "validate"
    RESOLVE = "resolve"
    RENDER = "render"
    PACKAGE = "package"


@dataclass(frozen=True)
class FieldError:
    """A single field-qualified validation problem."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class UIGenError(Exception):
    """Base class for all uigen errors."""

    stage: Stage = Stage.VALIDATE

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        self.message = message
        self.component = component
        self.platform = platform
        super().__init__(message)


class ValidationError(UIGenError):
    """Raised when a generation request is structurally malformed."""

    stage = Stage.VALIDATE

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors) or "invalid request"
        super().__init__(summary)


class NotFoundError(UIGenError):
    """Raised for unknown components, unknown platforms, or unsupported pairs.

    ``reason`` is one of the ``REASON_*`` constants so callers can branch on
    the condition without matching message text.
    """

    stage = Stage.RESOLVE

    REASON_NO_MAPPING = "no mapping"
    REASON_UNSUPPORTED = "platform unsupported for component"
    REASON_UNKNOWN_PLATFORM = "unknown platform"
    REASON_MISSING_FILE = "template file missing"

    def __init__(
        self,
        reason: str,
        *,
        component: Optional[str] = None,
        platform: Optional[str] = None,
        detail: str = "",
    ) -> None:
        self.reason = reason
        self.detail = detail
        parts = [reason]
        if component:
            parts.append(f"component={component}")
        if platform:
            parts.append(f"platform={platform}")
        message = " ".join(parts)
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, component=component, platform=platform)


class TemplateTimeoutError(UIGenError):
    """Raised when reading a template file exceeds the configured timeout."""

    stage = Stage.RESOLVE

    def __init__(
        self,
        path: str,
        timeout: float,
        *,
        component: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        self.path = path
        self.timeout = timeout
        super().__init__(
            f"Reading template {path} timed out after {timeout}s",
            component=component,
            platform=platform,
        )


class RenderError(UIGenError):
    """Raised when a template fails to compile or bind.

    ``phase`` is ``"compile"`` for syntax errors and ``"bind"`` for failures
    while evaluating the template against its context.
    """

    stage = Stage.RENDER

    COMPILE_FAILED = "compile"
    BIND_FAILED = "bind"

    def __init__(
        self,
        template: str,
        phase: str,
        detail: str,
        *,
        component: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        self.template = template
        self.phase = phase
        self.detail = detail
        super().__init__(
            f"Template {template} failed to {phase}: {detail}",
            component=component,
            platform=platform,
        )


class GenerationError(UIGenError):
    """Raised when the pipeline fails for a reason outside the other classes."""

    def __init__(
        self,
        stage: Stage,
        message: str,
        *,
        component: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        self.stage = stage
        super().__init__(
            f"{stage.value} failed: {message}",
            component=component,
            platform=platform,
        )
