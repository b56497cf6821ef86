"""Summaries derived from a scan result."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List

from .result import SEVERITY_ORDER, ScanResult


@dataclass(frozen=True)
class ReportSummary:
    """Counts over a scan result: total, per rule, per severity, and files touched."""

    total: int = 0
    by_rule: Dict[str, int] = field(default_factory=dict)
    by_severity: Dict[str, int] = field(default_factory=dict)
    files_with_findings: int = 0

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def aggregate(result: ScanResult) -> ReportSummary:
    by_rule: Dict[str, int] = {}
    by_severity: Dict[str, int] = {severity.value: 0 for severity in SEVERITY_ORDER}
    files = set()
    for finding in result.findings:
        by_rule[finding.rule] = by_rule.get(finding.rule, 0) + 1
        by_severity[finding.severity.value] += 1
        files.add(finding.path)
    return ReportSummary(
        total=len(result.findings),
        by_rule=dict(sorted(by_rule.items(), key=lambda item: (-item[1], item[0]))),
        by_severity=by_severity,
        files_with_findings=len(files),
    )


def format_summary_table(result: ScanResult, max_findings: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    summary = aggregate(result)
    lines: List[str] = []
    lines.append("Scan Summary")
    lines.append("=" * 40)
    header = f"{'Severity':<10} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for severity, count in summary.by_severity.items():
        lines.append(f"{severity:<10} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if result.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Files     : {len(result.files)} scanned, {summary.files_with_findings} with findings")
    lines.append(f"Findings  : {summary.total}")

    if summary.by_rule:
        lines.append("")
        lines.append("By Rule")
        lines.append("-" * 40)
        for rule, count in summary.by_rule.items():
            lines.append(f"{rule:<24} {count:>5}")

    findings = result.top_findings(max_findings)
    if findings:
        lines.append("")
        lines.append("Top Findings")
        lines.append("-" * 40)
        for finding in findings:
            lines.append(f"[{finding.severity.value}] {finding.rule} {finding.message}")
            lines.append(f"  Location: {finding.path}:{finding.line}")
    return "\n".join(lines)
