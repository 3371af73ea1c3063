"""uigen -- multi-target UI component generator.

Turns one validated component description into source artefacts for React,
Next.js, Vue, Angular, Svelte, Electron and React Native.

Quick usage::

    from uigen import UIGen

    gen = UIGen()
    result = await gen.generate_component(
        {"name": "Navbar", "category": "components", "platform": "vue"}
    )
    multi = await gen.generate_all_platforms({"name": "Navbar", "category": "components"})
"""

from uigen.api import UIGen
from uigen.config import Config
from uigen.errors import (
    FieldError,
    GenerationError,
    NotFoundError,
    RenderError,
    TemplateTimeoutError,
    UIGenError,
    ValidationError,
)
from uigen.models import (
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    MultiPlatformResult,
    Platform,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FieldError",
    "GenerationError",
    "GenerationOptions",
    "GenerationRequest",
    "GenerationResult",
    "MultiPlatformResult",
    "NotFoundError",
    "Platform",
    "RenderError",
    "TemplateTimeoutError",
    "UIGen",
    "UIGenError",
    "ValidationError",
]
