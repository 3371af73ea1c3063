"""uigen command-line interface.

Usage::

    python -m uigen generate navbar.json --platform vue
    python -m uigen generate navbar.json --all --locales
    python -m uigen list --platform svelte
    python -m uigen describe angular
    python -m uigen template-config data-table
    python -m uigen validate navbar.json
    python -m uigen platforms
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Any, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from uigen.api import UIGen
from uigen.config import Config
from uigen.errors import UIGenError, ValidationError
from uigen.generator import aggregate
from uigen.models import GenerationOptions, GenerationResult, MultiPlatformResult
from uigen.utils import (
    configure_logging,
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_generate(gen: UIGen, args: argparse.Namespace) -> int:
    raw = _load_request(args.config)
    if args.platform and isinstance(raw, dict):
        raw["platform"] = args.platform
    options = GenerationOptions(
        include_types=not args.no_types,
        include_tests=args.tests,
        include_stories=args.stories,
        include_locales=args.locales,
    )

    started = time.monotonic()
    if args.all:
        multi = asyncio.run(
            gen.generate_all_platforms(raw, options, max_concurrency=args.concurrency)
        )
        elapsed = time.monotonic() - started
        if args.json:
            console.print_json(multi.model_dump_json())
        else:
            _print_multi(multi, elapsed)
        return 0 if not multi.errors else 1

    result = asyncio.run(gen.generate_component(raw, options))
    elapsed = time.monotonic() - started
    if args.json:
        console.print_json(result.model_dump_json())
    else:
        _print_result(result, elapsed, show_code=args.show_code)
    return 0


def _cmd_list(gen: UIGen, args: argparse.Namespace) -> int:
    platforms = [args.platform] if args.platform else [p.value for p in gen.registry.platforms()]
    table = Table(title="Available templates", header_style="bold cyan")
    table.add_column("Platform", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Components")
    for platform in platforms:
        names = gen.list_components(platform)
        table.add_row(platform, str(len(names)), ", ".join(names))
    console.print(table)
    return 0


def _cmd_describe(gen: UIGen, args: argparse.Namespace) -> int:
    descriptor = gen.describe_platform(args.platform)
    if args.json:
        console.print_json(descriptor.model_dump_json())
        return 0
    enabled = [f for f, on in descriptor.default_feature_flags.items() if on]
    print_summary_table(
        {
            "Platform": descriptor.id.value,
            "Framework": descriptor.framework_label,
            "Family": descriptor.family.value,
            "Architecture": descriptor.architecture,
            "File extension": descriptor.file_extension,
            "Localization": descriptor.localization_pattern,
            "Supported features": ", ".join(descriptor.default_feature_flags),
            "Enabled by default": ", ".join(enabled) or "none",
            "Dependencies": ", ".join(descriptor.dependencies),
            "Templates": str(len(gen.list_components(descriptor.id))),
        },
        title=f"Platform: {descriptor.id.value}",
    )
    return 0


def _cmd_template_config(gen: UIGen, args: argparse.Namespace) -> int:
    request = gen.get_template_config(args.name)
    console.print_json(request.model_dump_json(by_alias=True, exclude_none=True))
    return 0


def _cmd_validate(gen: UIGen, args: argparse.Namespace) -> int:
    errors = gen.validate_config(_load_request(args.config))
    if not errors:
        print_success("Configuration is valid.")
        return 0
    for error in errors:
        print_error(str(error))
    return 1


def _cmd_platforms(gen: UIGen, args: argparse.Namespace) -> int:
    counts = gen.registry.template_count_by_platform()
    table = Table(title="Platforms", header_style="bold cyan")
    table.add_column("Platform", style="bold")
    table.add_column("Framework")
    table.add_column("Family")
    table.add_column("Extension")
    table.add_column("Templates", justify="right")
    for platform in gen.registry.platforms():
        d = gen.describe_platform(platform)
        marker = " (canonical)" if platform == gen.registry.canonical_platform else ""
        table.add_row(
            d.id.value + marker, d.framework_label, d.family.value, d.file_extension, str(counts[platform])
        )
    console.print(table)
    console.print(f"[bold]Total:[/bold] {gen.registry.total_template_count()} platform templates")
    return 0


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _print_result(result: GenerationResult, elapsed: float, show_code: bool = False) -> None:
    status = "[yellow]FALLBACK[/yellow]" if result.fallback else "[green]OK[/green]"
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Status", status)
    table.add_row("Platform", result.platform.value)
    table.add_row("Architecture", result.architecture)
    table.add_row("Template", result.template_path)
    table.add_row("Localization keys", str(len(result.localization_keys)))
    table.add_row("Dependencies", ", ".join(result.dependencies))
    table.add_row("Duration", format_duration(elapsed))
    console.print(Panel(table, title=f"Generated: {result.component}", border_style="green"))

    for f in result.files:
        console.print(f"  [green]+[/green] {f.path} [dim]({f.type.value})[/dim]")
    for warning in result.warnings:
        print_warning(f"  {warning}")
    if show_code:
        console.print()
        console.print(result.component_code, markup=False, highlight=False)


def _print_multi(multi: MultiPlatformResult, elapsed: float) -> None:
    table = Table(title=f"All platforms: {multi.component}")
    table.add_column("Platform", style="bold")
    table.add_column("Status")
    table.add_column("Files", justify="right")
    table.add_column("Details")

    for platform, result in multi.results.items():
        status = "[yellow]FALLBACK[/yellow]" if result.fallback else "[green]PASS[/green]"
        table.add_row(platform.value, status, str(len(result.files)), result.architecture)
    for platform, failure in multi.errors.items():
        table.add_row(
            platform.value,
            "[red]FAIL[/red]",
            "0",
            escape(f"{failure.stage.value}: {failure.message}"),
        )
    console.print(table)

    summary = aggregate(multi.results)
    console.print(
        f"\n[bold]Total:[/bold] {len(multi.results)} succeeded, {len(multi.errors)} failed, "
        f"{summary.total_files} files, {summary.unique_dependencies} unique dependencies "
        f"({format_duration(elapsed)})"
    )


def _load_request(path: str) -> Any:
    req_path = Path(path)
    if not req_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {req_path}")
    return json.loads(req_path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uigen",
        description="uigen -- multi-target UI component generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  uigen generate navbar.json --platform vue\n"
            "  uigen generate navbar.json --all --tests --stories\n"
            "  uigen template-config data-table\n"
        ),
    )
    parser.add_argument("--template-dir", default=None, help="Override the template directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_gen = sub.add_parser("generate", help="Generate a component")
    p_gen.add_argument("config", help="Path to a JSON component configuration")
    p_gen.add_argument("--platform", "-p", default=None, help="Target platform")
    p_gen.add_argument("--all", action="store_true", help="Generate for every supported platform")
    p_gen.add_argument("--concurrency", type=int, default=None, help="Max platforms in parallel")
    p_gen.add_argument("--no-types", action="store_true", help="Skip the types file")
    p_gen.add_argument("--tests", action="store_true", help="Include a test file")
    p_gen.add_argument("--stories", action="store_true", help="Include a story file")
    p_gen.add_argument("--locales", action="store_true", help="Include locale bundles")
    p_gen.add_argument("--show-code", action="store_true", help="Print the component code")
    p_gen.add_argument("--json", action="store_true", help="Print the result as JSON")
    p_gen.set_defaults(handler=_cmd_generate)

    p_list = sub.add_parser("list", help="List templates per platform")
    p_list.add_argument("--platform", "-p", default=None)
    p_list.set_defaults(handler=_cmd_list)

    p_desc = sub.add_parser("describe", help="Describe a platform")
    p_desc.add_argument("platform")
    p_desc.add_argument("--json", action="store_true")
    p_desc.set_defaults(handler=_cmd_describe)

    p_tc = sub.add_parser("template-config", help="Show a template's default configuration")
    p_tc.add_argument("name")
    p_tc.set_defaults(handler=_cmd_template_config)

    p_val = sub.add_parser("validate", help="Validate a component configuration")
    p_val.add_argument("config")
    p_val.set_defaults(handler=_cmd_validate)

    p_plat = sub.add_parser("platforms", help="List registered platforms")
    p_plat.set_defaults(handler=_cmd_platforms)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point for ``python -m uigen``."""
    args = build_parser().parse_args(argv)

    config = Config.from_env()
    if args.template_dir:
        config = config.model_copy(update={"template_dir": Path(args.template_dir)})
    if args.verbose:
        config = config.model_copy(update={"verbose": True})
    configure_logging(config.verbose)

    try:
        return args.handler(UIGen(config), args)
    except ValidationError as exc:
        for error in exc.errors:
            print_error(str(error))
        return 1
    except UIGenError as exc:
        print_error(f"Error: {exc}")
        return 1
    except (FileNotFoundError, json.JSONDecodeError) as exc:
        print_error(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
