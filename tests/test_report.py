from guidelint.report import ReportSummary, aggregate, format_summary_table
from guidelint.result import Finding, ScanResult
from guidelint.severity import Severity


def build_result():
    result = ScanResult(files=["a.cs", "b.cs", "c.cs"])
    result.add_finding(Finding("a.cs", 3, "todo-marker", "TODO/FIXME/HACK comment found", Severity.LOW))
    result.add_finding(Finding("a.cs", 7, "hardcoded-secret", "Potential hardcoded sensitive information", Severity.HIGH))
    result.add_finding(Finding("b.cs", 1, "todo-marker", "TODO/FIXME/HACK comment found", Severity.LOW))
    return result


def test_aggregate_counts():
    summary = aggregate(build_result())

    assert summary.total == 3
    assert summary.by_rule == {"todo-marker": 2, "hardcoded-secret": 1}
    assert list(summary.by_rule) == ["todo-marker", "hardcoded-secret"]
    assert summary.by_severity == {"CRITICAL": 0, "HIGH": 1, "MEDIUM": 0, "LOW": 2, "INFO": 0}
    assert summary.files_with_findings == 2


def test_aggregate_empty_result():
    assert aggregate(ScanResult()) == ReportSummary(
        by_severity={"CRITICAL": 0, "HIGH": 0, "MEDIUM": 0, "LOW": 0, "INFO": 0}
    )


def test_result_exit_code_and_status():
    result = build_result()

    assert result.exit_code() == 2
    assert not result.passed
    assert ScanResult().exit_code() == 0


def test_summary_table_lists_top_findings():
    table = format_summary_table(build_result())

    assert table.startswith("Scan Summary")
    assert "Status    : FAIL" in table
    assert "Files     : 3 scanned, 2 with findings" in table
    first_top = table.index("[HIGH] hardcoded-secret")
    assert first_top < table.index("[LOW] todo-marker")
    assert "  Location: a.cs:7" in table


def test_severity_summary_holds_only_per_severity_counts():
    result = build_result()

    assert result.summary.to_dict() == {"critical": 0, "high": 1, "medium": 0, "low": 2, "info": 0}
    assert not hasattr(result.summary, "total")
    assert result.total == 3
