"""Reduction of per-platform results into a combined report."""

from __future__ import annotations

from collections.abc import Mapping

from uigen.models import GenerationResult, GenerationSummary, MultiPlatformResult, Platform


def aggregate(results: Mapping[Platform, GenerationResult]) -> GenerationSummary:
    """Summarise successful per-platform results.

    Dependencies are de-duplicated by value across platforms, so two
    platforms declaring ``"react"`` contribute one unique dependency.
    """
    dependencies: set[str] = set()
    total_files = 0
    fallbacks: list[Platform] = []
    for platform, result in results.items():
        dependencies.update(result.dependencies)
        total_files += len(result.files)
        if result.fallback:
            fallbacks.append(platform)
    return GenerationSummary(
        total_files=total_files,
        unique_dependencies=len(dependencies),
        platform_count=len(results),
        fallback_platforms=fallbacks,
    )


def summarize(multi: MultiPlatformResult) -> GenerationSummary:
    """Aggregate a multi-platform run, including its failed platforms."""
    summary = aggregate(multi.results)
    return summary.model_copy(update={"failed_platforms": multi.failed})
