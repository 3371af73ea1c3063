"""uigen generator -- drives the resolve/render/package pipeline.

Quick usage::

    from uigen.generator import ComponentGenerator, aggregate

    generator = ComponentGenerator(registry)
    result = await generator.generate_component(request)
    multi = await generator.generate_all_platforms(request)
    summary = aggregate(multi.results)
"""

from uigen.generator.aggregator import aggregate, summarize
from uigen.generator.orchestrator import ComponentGenerator

__all__ = [
    "ComponentGenerator",
    "aggregate",
    "summarize",
]
