#!/usr/bin/env python3
"""Validate translation bundles and regenerate the loader manifest."""

from __future__ import annotations

import argparse
import json
import re
import sys
from collections import defaultdict
from pathlib import Path

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = REPO_ROOT / "src" / "localeshell"
TRANSLATIONS_DIR = PACKAGE_ROOT / "translations"
CONFIG_PATH = PACKAGE_ROOT / "backend" / "config" / "data" / "localization.yaml"
MANIFEST_PATH = TRANSLATIONS_DIR / "manifest.json"

PLACEHOLDER_PATTERN = re.compile(r"{{\s*([a-zA-Z0-9_.-]+)\s*}}")

Catalogues = dict[str, dict[str, dict[str, str]]]


class ValidationError(Exception):
    """Raised when validation detects unrecoverable issues."""


def _flatten_messages(tree: dict, prefix: str = "") -> dict[str, str]:
    items: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            items.update(_flatten_messages(value, path))
        else:
            items[path] = "" if value is None else str(value)
    return items


def _non_string_values(tree: dict, prefix: str = "") -> list[str]:
    paths: list[str] = []
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            paths.extend(_non_string_values(value, path))
        elif not isinstance(value, str):
            paths.append(path)
    return paths


def _load_catalog_config() -> tuple[list[str], list[str], str]:
    with CONFIG_PATH.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}

    locales = [str(entry["code"]) for entry in config.get("locales", [])]
    namespaces = [str(namespace) for namespace in config.get("namespaces", [])]
    base_locale = str(config.get("default_locale", ""))
    if not locales or not namespaces or base_locale not in locales:
        raise ValidationError(f"Localization configuration is incomplete: {CONFIG_PATH}")
    return locales, namespaces, base_locale


def _load_bundles(locales: list[str], namespaces: list[str]) -> tuple[Catalogues, list[str]]:
    """Read every ``{locale}/{namespace}.json`` bundle; unknown files are errors."""

    catalogues: Catalogues = defaultdict(dict)
    errors: list[str] = []

    if not TRANSLATIONS_DIR.is_dir():
        raise ValidationError(f"Missing translations directory: {TRANSLATIONS_DIR}")

    for path in sorted(TRANSLATIONS_DIR.glob("*/*.json")):
        locale, namespace = path.parent.name, path.stem
        if locale not in locales:
            errors.append(f"{locale}/{namespace}: locale is not configured")
            continue
        if namespace not in namespaces:
            errors.append(f"{locale}/{namespace}: namespace is not configured")
            continue

        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            errors.append(f"{locale}/{namespace}: bundle must be a JSON object")
            continue

        invalid = _non_string_values(payload)
        if invalid:
            errors.extend(f"{locale}/{namespace}: {path} must be a string" for path in invalid)
            continue

        catalogues[namespace][locale] = _flatten_messages(payload)

    if not catalogues:
        raise ValidationError("No translation bundles discovered")

    return catalogues, errors


def _missing_bundles(catalogues: Catalogues, locales: list[str], namespaces: list[str]) -> list[str]:
    return [
        f"{locale}/{namespace}"
        for locale in locales
        for namespace in namespaces
        if locale not in catalogues.get(namespace, {})
    ]


def _missing_keys(catalogues: Catalogues, base_locale: str) -> list[str]:
    issues: list[str] = []
    for namespace, bundles in sorted(catalogues.items()):
        expected = set(bundles.get(base_locale, {}))
        for locale, messages in sorted(bundles.items()):
            missing = expected - set(messages)
            if missing:
                issues.append(
                    f"{locale}/{namespace} missing {len(missing)} keys: {', '.join(sorted(missing))}"
                )
    return issues


def _placeholder_inconsistencies(catalogues: Catalogues) -> list[str]:
    inconsistencies: list[str] = []
    for namespace, bundles in sorted(catalogues.items()):
        by_key: dict[str, dict[str, frozenset[str]]] = defaultdict(dict)
        for locale, messages in bundles.items():
            for key, message in messages.items():
                by_key[key][locale] = frozenset(PLACEHOLDER_PATTERN.findall(message))

        for key, locale_map in sorted(by_key.items()):
            if len(set(locale_map.values())) <= 1:
                continue
            details = ", ".join(
                f"{locale}={{{', '.join(sorted(values))}}}"
                for locale, values in sorted(locale_map.items())
            )
            inconsistencies.append(f"{namespace}:{key} placeholders differ: {details}")
    return inconsistencies


def build_manifest(catalogues: Catalogues, base_locale: str) -> dict:
    resources = sorted(
        f"{locale}/{namespace}"
        for namespace, bundles in catalogues.items()
        for locale in bundles
    )
    return {"base_locale": base_locale, "resources": resources}


def _write_manifest(manifest: dict) -> None:
    MANIFEST_PATH.write_text(
        json.dumps(manifest, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )


def _manifest_is_current(manifest: dict) -> bool:
    if not MANIFEST_PATH.exists():
        return False
    return json.loads(MANIFEST_PATH.read_text(encoding="utf-8")) == manifest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--check",
        action="store_true",
        help="Fail instead of rewriting when the manifest is out of date",
    )
    parser.add_argument(
        "--fail-on-missing-bundles",
        action="store_true",
        help="Exit with an error if a configured locale lacks a namespace bundle",
    )
    args = parser.parse_args(argv)

    locales, namespaces, base_locale = _load_catalog_config()
    catalogues, layout_errors = _load_bundles(locales, namespaces)

    missing_bundles = _missing_bundles(catalogues, locales, namespaces)
    missing_keys = _missing_keys(catalogues, base_locale)
    inconsistencies = _placeholder_inconsistencies(catalogues)
    manifest = build_manifest(catalogues, base_locale)

    stale_manifest = False
    if args.check:
        stale_manifest = not _manifest_is_current(manifest)
        if stale_manifest:
            print(f"[manifest] {MANIFEST_PATH.name} is out of date; rerun without --check")
    else:
        _write_manifest(manifest)

    for issue in layout_errors:
        print(f"[layout] {issue}")
    for issue in missing_bundles:
        print(f"[missing-bundle] {issue} (loader falls back to {base_locale})")
    for issue in missing_keys:
        print(f"[missing] {issue}")
    for issue in inconsistencies:
        print(f"[placeholder] {issue}")

    if layout_errors or missing_keys or inconsistencies or stale_manifest:
        return 1
    if missing_bundles and args.fail_on_missing_bundles:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
