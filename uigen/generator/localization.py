"""Localization key extraction from rendered component code.

Scans generated source for translation-call markers and collects the keys
they reference, with placeholder default text derived from each key.

Recognised markers::

    t('navbar.title')            React, Next.js, Electron, React Native
    $t('navbar.title')           Vue / Svelte store syntax
    translate.instant('x.y')     Angular service calls
    'navbar.title' | translate   Angular template pipe
"""

from __future__ import annotations

import json
import re

from uigen.models import Locale
from uigen.utils import humanize_key

_KEY = r"([A-Za-z0-9_][A-Za-z0-9_.\-]*)"

_MARKERS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?<![\w.])\$?t\(\s*['\"`]" + _KEY + r"['\"`]"),
    re.compile(r"\btranslate\.instant\(\s*['\"]" + _KEY + r"['\"]"),
    re.compile(r"['\"]" + _KEY + r"['\"]\s*\|\s*translate\b"),
)


def extract_localization_keys(code: str) -> dict[str, str]:
    """Return unique translation keys in order of first appearance.

    Each key maps to placeholder text derived from its last segment, e.g.
    ``navbar.searchPlaceholder`` -> ``"Search placeholder"``.
    """
    found: list[tuple[int, str]] = []
    for pattern in _MARKERS:
        for match in pattern.finditer(code):
            found.append((match.start(1), match.group(1)))
    found.sort()

    keys: dict[str, str] = {}
    for _, key in found:
        if key not in keys:
            keys[key] = humanize_key(key)
    return keys


def locale_bundle(keys: dict[str, str]) -> str:
    """Serialise *keys* as a nested JSON message bundle."""
    nested: dict = {}
    for key, text in keys.items():
        node = nested
        parts = key.split(".")
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                # A shorter key already claimed this segment as a leaf.
                child = node[part] = {"_": child}
            node = child
        leaf = parts[-1]
        if isinstance(node.get(leaf), dict):
            node[leaf]["_"] = text
        else:
            node[leaf] = text
    return json.dumps(nested, indent=2, ensure_ascii=False) + "\n"


SUPPORTED_LOCALES: tuple[str, ...] = tuple(locale.value for locale in Locale)
