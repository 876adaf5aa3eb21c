"""
Template layout checker.

Verifies that a checkout of the full-stack template matches its documented
layout: the listed directories exist and the listed configuration files
parse in their declared format.  The expected layout is described by a YAML
manifest; ``layout.yaml`` next to this module is the default one.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from sample_backend.core.config import load_config
from sample_backend.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = Path(__file__).resolve().parent / "layout.yaml"

MISSING_DIRECTORY = "missing_directory"
MISSING_FILE = "missing_file"
INVALID_SYNTAX = "invalid_syntax"

_ENV_LINE = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=(.*)$")


@dataclass(frozen=True)
class LayoutEntry:
    """One path the manifest expects."""

    path: str
    optional: bool = False
    format: Optional[str] = None


@dataclass(frozen=True)
class LayoutIssue:
    kind: str
    path: str
    message: str


@dataclass
class LayoutReport:
    """Outcome of a layout check."""

    root: Path
    checked: int = 0
    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


# ── Syntax validators ──────────────────────────────────────────────────────


def _strip_json_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside of string literals."""
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ValueError("unterminated block comment")
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _validate_json(text: str) -> None:
    json.loads(text)


def _drop_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing bracket, outside strings."""
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j == n or text[j] not in "}]":
                out.append(ch)
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def jsonc_to_json(text: str) -> str:
    """Turn tsconfig-style JSON (comments, trailing commas) into strict JSON."""
    return _drop_trailing_commas(_strip_json_comments(text))


def _validate_jsonc(text: str) -> None:
    json.loads(jsonc_to_json(text))


def _validate_yaml(text: str) -> None:
    yaml.safe_load(text)


def _validate_toml(text: str) -> None:
    tomllib.loads(text)


def _validate_env(text: str) -> None:
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if not _ENV_LINE.match(line):
            raise ValueError(f"line {lineno}: expected KEY=VALUE, got {raw!r}")


VALIDATORS: dict[str, Callable[[str], None]] = {
    "json": _validate_json,
    "jsonc": _validate_jsonc,
    "yaml": _validate_yaml,
    "toml": _validate_toml,
    "env": _validate_env,
}

_PARSE_ERRORS = (ValueError, yaml.YAMLError, tomllib.TOMLDecodeError)


def validate_syntax(path: Path, fmt: str) -> Optional[str]:
    """Return an error message if ``path`` does not parse as ``fmt``."""
    validator = VALIDATORS.get(fmt)
    if validator is None:
        raise ConfigurationError(f"Unknown file format: {fmt}", {"path": str(path)})
    try:
        validator(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        return f"not valid UTF-8: {exc}"
    except _PARSE_ERRORS as exc:
        return str(exc).splitlines()[0] if str(exc) else type(exc).__name__
    return None


# ── Manifest ───────────────────────────────────────────────────────────────


def _parse_entries(raw: Any, section: str, require_format: bool) -> list[LayoutEntry]:
    if not isinstance(raw, list):
        raise ConfigurationError(f"Manifest section '{section}' must be a list")
    entries = []
    for item in raw:
        if isinstance(item, str):
            item = {"path": item}
        if not isinstance(item, dict) or not item.get("path"):
            raise ConfigurationError(
                f"Manifest entry in '{section}' needs a path", {"entry": item}
            )
        fmt = item.get("format")
        if require_format and fmt not in VALIDATORS:
            raise ConfigurationError(
                f"Manifest file entry has unsupported format: {fmt!r}",
                {"path": item["path"], "supported": sorted(VALIDATORS)},
            )
        entries.append(
            LayoutEntry(path=str(item["path"]), optional=bool(item.get("optional", False)), format=fmt)
        )
    return entries


def load_manifest(manifest_path: str | Path = DEFAULT_MANIFEST) -> tuple[list[LayoutEntry], list[LayoutEntry]]:
    """Load a manifest and return its ``(directories, files)`` entries."""
    try:
        manifest = load_config(manifest_path, defaults={"directories": [], "files": []})
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Manifest is not valid YAML: {manifest_path}",
            {"error": str(exc).splitlines()[0] if str(exc) else type(exc).__name__},
        ) from exc
    directories = _parse_entries(manifest["directories"], "directories", require_format=False)
    files = _parse_entries(manifest["files"], "files", require_format=True)
    return directories, files


# ── Check ──────────────────────────────────────────────────────────────────


def check_layout(root: str | Path, manifest_path: str | Path = DEFAULT_MANIFEST) -> LayoutReport:
    """
    Check the template checkout at ``root`` against a manifest.

    Args:
        root: Template root directory
        manifest_path: YAML manifest describing the expected layout

    Returns:
        LayoutReport listing every missing path and unparseable file
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Template root not found: {root}")

    directories, files = load_manifest(manifest_path)
    report = LayoutReport(root=root)

    for entry in directories:
        report.checked += 1
        target = root / entry.path
        if target.is_dir() or entry.optional:
            continue
        report.issues.append(
            LayoutIssue(MISSING_DIRECTORY, entry.path, "directory does not exist")
        )

    for entry in files:
        report.checked += 1
        target = root / entry.path
        if not target.is_file():
            if not entry.optional:
                report.issues.append(LayoutIssue(MISSING_FILE, entry.path, "file does not exist"))
            continue
        error = validate_syntax(target, entry.format)
        if error:
            report.issues.append(
                LayoutIssue(INVALID_SYNTAX, entry.path, f"invalid {entry.format}: {error}")
            )

    logger.info("Checked %d layout entries under %s: %d issue(s)", report.checked, root, len(report.issues))
    return report
