"""Run a rule set across many files and merge the findings."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .config import ScanConfig
from .errors import ConfigurationError, FileAccessError
from .line_scanner import scan_path
from .logging import get_logger
from .result import SCAN_ERROR_RULE, Finding, ScanResult
from .rules import FileRule, LineRule, Rule
from .severity import Severity

PathLike = Union[str, Path]


def run(
    file_list: Iterable[PathLike],
    rules: Optional[Sequence[Rule]] = None,
    config: Optional[ScanConfig] = None,
) -> ScanResult:
    """Scan every path in ``file_list`` and return one ordered :class:`ScanResult`.

    ``rules`` defaults to ``config.rules`` (the built-in catalog when no
    config is given). A file that cannot be read becomes a ``scan-error``
    finding unless ``config.continue_on_error`` is false, in which case
    the :class:`FileAccessError` propagates. Findings are sorted by
    (path, line, rule declaration order) regardless of how files were
    scheduled.
    """

    config = config or ScanConfig()
    active = list(config.rules if rules is None else rules)
    _validate_rules(active)
    paths = _unique_paths(file_list)

    logger = get_logger()
    logger.info("scan_start files=%d rules=%d workers=%d", len(paths), len(active), config.max_workers)

    if config.max_workers > 1 and len(paths) > 1:
        per_file = _scan_parallel(paths, active, config)
    else:
        per_file = [_scan_one(path, active, config.continue_on_error) for path in paths]

    rank: Dict[str, int] = {rule.id: idx for idx, rule in enumerate(active)}
    merged = [finding for findings in per_file for finding in findings]
    merged.sort(key=lambda finding: (finding.path, finding.line, rank.get(finding.rule, -1)))

    result = ScanResult(files=sorted(paths))
    for finding in merged:
        result.add_finding(finding)

    logger.info(
        "scan_done files=%d findings=%d errors=%d",
        len(paths),
        result.total,
        len(result.errors),
    )
    return result


def _scan_one(path: str, rules: Sequence[Rule], continue_on_error: bool) -> List[Finding]:
    logger = get_logger()
    logger.debug("scan_file path=%s", path)
    try:
        return scan_path(path, rules)
    except FileAccessError as exc:
        if not continue_on_error:
            raise
        logger.warning("scan_error path=%s reason=%s", path, exc.reason)
        return [
            Finding(
                path=path,
                line=0,
                rule=SCAN_ERROR_RULE,
                message=f"Could not scan file: {exc.reason}",
                severity=Severity.MEDIUM,
            )
        ]


def _scan_parallel(paths: Sequence[str], rules: Sequence[Rule], config: ScanConfig) -> List[List[Finding]]:
    with ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="scan") as pool:
        futures: List[Future] = [pool.submit(_scan_one, path, rules, config.continue_on_error) for path in paths]
        results: List[List[Finding]] = []
        try:
            for future in futures:
                results.append(future.result())
        except FileAccessError:
            # Stop scheduling; files already being scanned finish before the pool exits.
            for future in futures:
                future.cancel()
            raise
    return results


def _validate_rules(rules: Sequence[Rule]) -> None:
    seen = set()
    for rule in rules:
        if not isinstance(rule, (LineRule, FileRule)):
            raise ConfigurationError(f"Unsupported rule definition: {rule!r}")
        if rule.id == SCAN_ERROR_RULE:
            raise ConfigurationError(f"Rule id '{SCAN_ERROR_RULE}' is reserved")
        if rule.id in seen:
            raise ConfigurationError(f"Duplicate rule id '{rule.id}'")
        seen.add(rule.id)


def _unique_paths(file_list: Iterable[PathLike]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for item in file_list:
        path = str(item)
        if path in seen:
            continue
        seen.add(path)
        ordered.append(path)
    return ordered
