"""Scan configuration and its YAML loader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from .errors import ConfigurationError
from .result import SCAN_ERROR_RULE
from .rules import LineRule, PatternFileRule, Rule, Scope
from .rules.catalog import default_rules
from .severity import Severity
from .utils import read_yaml_file

DEFAULT_CONFIG_FILENAME = ".guidelint.yaml"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".cs",)
DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = ("bin", "obj", ".git", ".vs", "node_modules")

_TOP_LEVEL_KEYS = {
    "continue_on_error",
    "max_workers",
    "extensions",
    "exclude_dirs",
    "disabled_rules",
    "severity",
    "rules",
}
_RULE_KEYS = {"id", "pattern", "message", "severity", "scope", "ignore_case", "exclude"}


@dataclass(frozen=True)
class ScanConfig:
    """Everything a scan needs besides the file list."""

    rules: Tuple[Rule, ...] = field(default_factory=lambda: tuple(default_rules()))
    continue_on_error: bool = True
    max_workers: int = 1
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS


def load_config(path: Union[str, Path]) -> ScanConfig:
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        raw = read_yaml_file(config_path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file {config_path} is not valid YAML: {exc}") from exc

    if raw is None:
        return ScanConfig()
    return build_config(raw, source=str(config_path))


def build_config(raw: Any, source: str = "<config>") -> ScanConfig:
    """Validate an already-parsed configuration mapping."""

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{source}: configuration must be a mapping")
    unknown = sorted(set(raw) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigurationError(f"{source}: unknown key(s) {', '.join(map(str, unknown))}")

    custom = [_build_rule(item, idx, source) for idx, item in enumerate(_ensure_list(raw, "rules", source))]
    rules = default_rules() + custom

    seen: set = set()
    for rule in rules:
        if rule.id == SCAN_ERROR_RULE:
            raise ConfigurationError(f"{source}: rule id '{SCAN_ERROR_RULE}' is reserved")
        if rule.id in seen:
            raise ConfigurationError(f"{source}: duplicate rule id '{rule.id}'")
        seen.add(rule.id)

    disabled = {str(item) for item in _ensure_list(raw, "disabled_rules", source)}
    missing = sorted(disabled - seen)
    if missing:
        raise ConfigurationError(f"{source}: cannot disable unknown rule(s) {', '.join(missing)}")
    rules = [rule for rule in rules if rule.id not in disabled]

    overrides = raw.get("severity") or {}
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"{source}: 'severity' must map rule ids to severities")
    unknown_ids = sorted(str(key) for key in overrides if str(key) not in seen)
    if unknown_ids:
        raise ConfigurationError(f"{source}: severity override for unknown rule(s) {', '.join(unknown_ids)}")
    levels: Dict[str, Severity] = {str(key): Severity.parse(value) for key, value in overrides.items()}
    rules = [rule.with_severity(levels[rule.id]) if rule.id in levels else rule for rule in rules]

    max_workers = raw.get("max_workers", 1)
    if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
        raise ConfigurationError(f"{source}: 'max_workers' must be a positive integer")

    continue_on_error = raw.get("continue_on_error", True)
    if not isinstance(continue_on_error, bool):
        raise ConfigurationError(f"{source}: 'continue_on_error' must be true or false")

    extensions = tuple(_normalize_extension(item) for item in _ensure_list(raw, "extensions", source)) or DEFAULT_EXTENSIONS
    exclude_dirs = tuple(str(item) for item in _ensure_list(raw, "exclude_dirs", source)) or DEFAULT_EXCLUDE_DIRS

    return ScanConfig(
        rules=tuple(rules),
        continue_on_error=continue_on_error,
        max_workers=max_workers,
        extensions=extensions,
        exclude_dirs=exclude_dirs,
    )


def _build_rule(item: Any, idx: int, source: str) -> Rule:
    if not isinstance(item, dict):
        raise ConfigurationError(f"{source}: rule at index {idx} must be a mapping")
    missing = [key for key in ("id", "pattern", "message") if key not in item]
    if missing:
        raise ConfigurationError(f"{source}: rule at index {idx} is missing key(s) {', '.join(missing)}")
    unknown = sorted(set(item) - _RULE_KEYS)
    if unknown:
        raise ConfigurationError(f"{source}: rule '{item['id']}' has unknown key(s) {', '.join(unknown)}")

    scope = Scope.parse(item.get("scope", "line"))
    severity = Severity.parse(item.get("severity", Severity.MEDIUM))
    ignore_case = bool(item.get("ignore_case", False))
    if scope is Scope.FILE:
        if item.get("exclude"):
            raise ConfigurationError(f"{source}: rule '{item['id']}': 'exclude' only applies to line rules")
        return PatternFileRule(
            id=str(item["id"]),
            pattern=str(item["pattern"]),
            message=str(item["message"]),
            severity=severity,
            ignore_case=ignore_case,
        )
    exclude = item.get("exclude")
    return LineRule(
        id=str(item["id"]),
        pattern=str(item["pattern"]),
        message=str(item["message"]),
        severity=severity,
        exclude=str(exclude) if exclude else None,
        ignore_case=ignore_case,
    )


def _ensure_list(raw: Dict[str, Any], key: str, source: str) -> List[Any]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"{source}: '{key}' must be a list")
    return value


def _normalize_extension(value: Any) -> str:
    text = str(value).strip().lower()
    if not text:
        raise ConfigurationError("Empty file extension in 'extensions'")
    return text if text.startswith(".") else f".{text}"
