"""Shared utility functions for uigen.

Provides identifier case conversion, Rich-based console reporting, logging
setup, and small formatting helpers used by the generator and the CLI.
"""

from __future__ import annotations

import logging
import re

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
# Any run of non-word characters or underscores separates words; letters and
# digits from any script are kept.
_NON_ALNUM = re.compile(r"[\W_]+")


def split_words(value: str) -> list[str]:
    """Split an arbitrary name into its words.

    Handles spaces, hyphens, underscores and camel/Pascal case boundaries.
    Non-ASCII letters are kept as part of their word::

        split_words("UserCard")       -> ["User", "Card"]
        split_words("data-table")     -> ["data", "table"]
        split_words("HTMLPanel view") -> ["HTML", "Panel", "view"]
        split_words("Ümlaut Karte")   -> ["Ümlaut", "Karte"]
    """
    spaced = _ACRONYM_BOUNDARY.sub(r"\1 \2", value)
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", spaced)
    return [word for word in _NON_ALNUM.split(spaced) if word]


def to_pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some thing`` to ``SomeThing``."""
    return "".join(word[:1].upper() + word[1:] for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert ``some-thing`` to ``someThing``."""
    pascal = to_pascal_case(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_kebab_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some thing`` to ``some-thing``."""
    return "-".join(word.lower() for word in split_words(value))


def to_snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return "_".join(word.lower() for word in split_words(value))


def normalize_component_name(name: str) -> str:
    """Map a component name to its canonical registry key.

    Lowercases and hyphenates, so ``"User Card"``, ``"UserCard"`` and
    ``"user-card"`` all resolve to ``"user-card"``.
    """
    return to_kebab_case(name.strip())


def humanize_key(key: str) -> str:
    """Derive placeholder text from the last segment of a dotted key.

    Examples::

        humanize_key("navbar.title")            -> "Title"
        humanize_key("search.placeholderText")  -> "Placeholder text"
    """
    last = key.rsplit(".", 1)[-1]
    words = [w.lower() for w in split_words(last)]
    if not words:
        return key
    text = " ".join(words)
    return text[0].upper() + text[1:]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a short human-readable string.

    Examples::

        format_duration(0.0042) -> "4ms"
        format_duration(3.7)    -> "3.7s"
    """
    if seconds < 0:
        return "0ms"
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    return f"{seconds:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``uigen`` loggers through a Rich handler on the shared console."""
    logger = logging.getLogger("uigen")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
