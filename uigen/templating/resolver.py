"""Template resolution with single-hop canonical fallback.

Given a logical component name and a target platform, locate the concrete
template body:

1. Normalise the name to its registry key.
2. Look up the mapping (``NotFoundError("no mapping")`` if absent).
3. Refuse platforms the mapping does not declare
   (``NotFoundError("platform unsupported for component")``).
4. Read ``<platform root>/<relative path>``.
5. If that file does not exist, read the canonical platform's copy once and
   tag the result as a fallback.  A second miss is a hard ``NotFoundError``.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from uigen.errors import GenerationError, NotFoundError, Stage, TemplateTimeoutError
from uigen.models import Platform, TemplateSource
from uigen.registry import PlatformRegistry
from uigen.utils import normalize_component_name

logger = logging.getLogger(__name__)

# Templates that are not owned by any single platform (types, tests, stories)
# live in this directory next to the per-platform roots.
SHARED_DIR = "_shared"


class TemplateResolver:
    """Locates template bodies for ``(component, platform)`` pairs.

    All platform knowledge comes from the injected registry: template roots
    from the descriptors, coverage from the mappings, and the fallback target
    from ``registry.canonical_platform``.
    """

    def __init__(self, registry: PlatformRegistry, read_timeout: float = 5.0) -> None:
        self.registry = registry
        self.read_timeout = read_timeout

    # -- Planning ----------------------------------------------------------

    def candidates(self, component: str, platform: Platform | str) -> list[tuple[Platform, Path]]:
        """Return the ordered read attempts for *component* on *platform*.

        The list has one entry (the platform's own file) or two (own file,
        then the canonical platform's file).  Never more.

        Raises:
            NotFoundError: For unknown components or unsupported platforms.
        """
        key = normalize_component_name(component)
        mapping = self.registry.mapping(key)
        descriptor = self.registry.describe(platform)
        if descriptor.id not in mapping.supported_platforms:
            raise NotFoundError(
                NotFoundError.REASON_UNSUPPORTED,
                component=key,
                platform=descriptor.id.value,
            )

        attempts = [(descriptor.id, descriptor.template_root / mapping.relative_template_path)]
        canonical = self.registry.canonical_platform
        if descriptor.id != canonical:
            canonical_root = self.registry.describe(canonical).template_root
            attempts.append((canonical, canonical_root / mapping.relative_template_path))
        return attempts

    # -- Resolution --------------------------------------------------------

    def resolve(self, component: str, platform: Platform | str) -> TemplateSource:
        """Synchronously resolve the template body for *component* on *platform*."""
        key = normalize_component_name(component)
        requested = self.registry.describe(platform).id
        attempts = self.candidates(key, requested)
        for index, (source_platform, path) in enumerate(attempts):
            body = self._read(path, key, requested)
            if body is not None:
                return self._build_source(key, requested, source_platform, path, index > 0, body)
        raise self._missing(key, requested, attempts)

    async def aresolve(self, component: str, platform: Platform | str) -> TemplateSource:
        """Resolve like :meth:`resolve`, reading files off the event loop.

        Each read is bounded by ``read_timeout`` so a locked or stalled file
        cannot hang a multi-platform run.

        Raises:
            TemplateTimeoutError: If a read exceeds the timeout.
        """
        key = normalize_component_name(component)
        requested = self.registry.describe(platform).id
        attempts = self.candidates(key, requested)
        for index, (source_platform, path) in enumerate(attempts):
            body = await self._read_with_timeout(path, key, requested)
            if body is not None:
                return self._build_source(key, requested, source_platform, path, index > 0, body)
        raise self._missing(key, requested, attempts)

    async def aresolve_shared(self, name: str, component: str, platform: Platform) -> TemplateSource:
        """Resolve a platform-independent template from the shared directory.

        The shared directory sits next to the canonical platform's root.
        """
        root = self.registry.describe(self.registry.canonical_platform).template_root.parent
        path = root / SHARED_DIR / name
        body = await self._read_with_timeout(path, component, platform)
        if body is None:
            raise NotFoundError(
                NotFoundError.REASON_MISSING_FILE,
                component=component,
                platform=platform.value,
                detail=str(path),
            )
        return TemplateSource(
            component=component,
            platform=platform,
            source_platform=platform,
            path=str(path),
            body=body,
        )

    # -- Internals ---------------------------------------------------------

    def _build_source(
        self,
        component: str,
        requested: Platform,
        source_platform: Platform,
        path: Path,
        fallback: bool,
        body: str,
    ) -> TemplateSource:
        if fallback:
            logger.info(
                "No %s template for %s; using %s template %s",
                requested.value,
                component,
                source_platform.value,
                path,
            )
        return TemplateSource(
            component=component,
            platform=requested,
            source_platform=source_platform,
            path=str(path),
            body=body,
            fallback=fallback,
        )

    def _read(self, path: Path, component: str, platform: Platform) -> str | None:
        try:
            return _read_if_exists(path)
        except UnicodeDecodeError as exc:
            raise _undecodable(path, component, platform, exc) from exc

    async def _read_with_timeout(
        self, path: Path, component: str, platform: Platform
    ) -> str | None:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(_read_if_exists, path), timeout=self.read_timeout
            )
        except asyncio.TimeoutError:
            raise TemplateTimeoutError(
                str(path), self.read_timeout, component=component, platform=platform.value
            ) from None
        except UnicodeDecodeError as exc:
            raise _undecodable(path, component, platform, exc) from exc

    @staticmethod
    def _missing(
        component: str, platform: Platform, attempts: list[tuple[Platform, Path]]
    ) -> NotFoundError:
        tried = ", ".join(str(path) for _, path in attempts)
        return NotFoundError(
            NotFoundError.REASON_MISSING_FILE,
            component=component,
            platform=platform.value,
            detail=f"tried {tried}",
        )


def _undecodable(
    path: Path, component: str, platform: Platform, exc: UnicodeDecodeError
) -> GenerationError:
    return GenerationError(
        Stage.RESOLVE,
        f"template {path} is not valid UTF-8 (byte {exc.start})",
        component=component,
        platform=platform.value,
    )


def _read_if_exists(path: Path) -> str | None:
    """Read *path* as UTF-8, returning ``None`` if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
