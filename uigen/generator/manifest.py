"""File manifest assembly.

Decides which files a generation run produces and where they go.  The
component file is always present; types, tests, stories and locale bundles
follow the caller's :class:`~uigen.models.GenerationOptions`.
"""

from __future__ import annotations

from typing import Optional

from uigen.generator.localization import SUPPORTED_LOCALES, locale_bundle
from uigen.models import (
    FileType,
    GeneratedFile,
    GenerationOptions,
    GenerationRequest,
    PlatformDescriptor,
)
from uigen.utils import to_kebab_case, to_pascal_case


def component_path(request: GenerationRequest, descriptor: PlatformDescriptor) -> str:
    return (
        f"components/{request.category.value}/"
        f"{to_pascal_case(request.name)}{descriptor.file_extension}"
    )


def build_manifest(
    request: GenerationRequest,
    descriptor: PlatformDescriptor,
    options: GenerationOptions,
    *,
    component_code: str,
    types_code: str = "",
    localization_keys: Optional[dict[str, str]] = None,
    test_code: str = "",
    story_code: str = "",
) -> list[GeneratedFile]:
    """Return the ordered file list for one platform's output."""
    pascal = to_pascal_case(request.name)
    kebab = to_kebab_case(request.name)
    category = request.category.value

    files = [
        GeneratedFile(
            path=component_path(request, descriptor),
            type=FileType.COMPONENT,
            content=component_code,
        )
    ]
    if options.include_types:
        files.append(
            GeneratedFile(path=f"types/{kebab}.types.ts", type=FileType.TYPES, content=types_code)
        )
    if options.include_tests:
        files.append(
            GeneratedFile(
                path=f"components/{category}/__tests__/{pascal}.test.ts",
                type=FileType.TEST,
                content=test_code,
            )
        )
    if options.include_stories:
        files.append(
            GeneratedFile(
                path=f"stories/{pascal}.stories.ts",
                type=FileType.STORY,
                content=story_code,
            )
        )
    if options.include_locales:
        bundle = locale_bundle(localization_keys or {})
        for locale in SUPPORTED_LOCALES:
            files.append(
                GeneratedFile(
                    path=f"locales/{locale}/{kebab}.json",
                    type=FileType.LOCALE,
                    content=bundle,
                )
            )
    return files
