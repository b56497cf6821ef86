import pytest

from guidelint.errors import FileAccessError
from guidelint.line_scanner import scan, scan_path
from guidelint.rules import FileRule, PatternFileRule
from guidelint.rules.catalog import default_rules
from guidelint.source import SourceFile, load_source


def test_empty_file_yields_no_findings():
    assert scan(SourceFile(path="Empty.cs", text=""), default_rules()) == []


def test_clean_file_yields_no_findings():
    text = (
        "/// <summary>Adds numbers.</summary>\n"
        "public static class Calculator\n"
        "{\n"
        "    public static int Add(int a, int b)\n"
        "    {\n"
        "        if (a < 0)\n"
        "        {\n"
        "            return b;\n"
        "        }\n"
        "        return a + b;\n"
        "    }\n"
        "}\n"
    )
    assert scan(SourceFile(path="Calculator.cs", text=text), default_rules()) == []


def test_findings_ordered_by_line_then_rule_order():
    text = "public class Foo\n{\n    void Run() { if (x) Go(); // TODO tidy\n    }\n}"
    findings = scan(SourceFile(path="Foo.cs", text=text), default_rules())

    assert [(f.line, f.rule) for f in findings] == [
        (1, "missing-doc-comment"),
        (3, "missing-braces"),
        (3, "todo-marker"),
    ]


def test_same_line_ties_follow_rule_declaration_order():
    findings = scan(SourceFile(path="a.cs", text='if (x) Run("secret"); // TODO'), default_rules())

    assert [f.rule for f in findings] == ["missing-braces", "hardcoded-secret", "todo-marker"]


def test_scan_is_deterministic():
    source = SourceFile(path="a.cs", text="// TODO\nif (x) Run();\npublic enum Mode { A }\ncatch { }")
    rules = default_rules()

    assert scan(source, rules) == scan(source, rules)


def test_line_numbers_stay_within_file():
    source = SourceFile(path="a.cs", text="public class A { }\n// HACK\ncatch { }\n")
    for finding in scan(source, default_rules()):
        assert 0 <= finding.line <= len(source.lines)
        assert finding.path == "a.cs"


def test_scan_path_missing_file_raises(tmp_path):
    with pytest.raises(FileAccessError) as excinfo:
        scan_path(tmp_path / "missing.cs", default_rules())

    assert excinfo.value.reason == "file not found"


def test_scan_path_reads_utf8_with_bom(tmp_path):
    path = tmp_path / "bom.cs"
    path.write_bytes("\ufeff// TODO: strip\n".encode("utf-8"))

    findings = scan_path(path, default_rules())

    assert [(f.line, f.rule) for f in findings] == [(1, "todo-marker")]


def test_load_source_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "latin1.cs"
    path.write_bytes(b"var s = \"caf\xe9\";\n")

    with pytest.raises(FileAccessError) as excinfo:
        load_source(path)

    assert "UTF-8" in excinfo.value.reason


def test_unsupported_rule_type_is_rejected():
    with pytest.raises(TypeError):
        scan(SourceFile(path="a.cs", text="x"), [object()])


@pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\x1c", "\u2028", "\x85"])
def test_only_newline_ends_a_line(separator):
    source = SourceFile(path="a.cs", text=f"var a = 1;{separator}var b = 2;\n// TODO fix\n")

    assert len(source.lines) == 2
    assert [(f.line, f.rule) for f in scan(source, default_rules())] == [(2, "todo-marker")]


def test_line_and_file_rules_agree_on_line_numbers():
    source = SourceFile(path="a.cs", text="int a;\u2028int b;\n#region Setup\n")
    rule = PatternFileRule(id="region", pattern=r"#region\s+(\w+)", message="Region {name}")

    findings = scan(source, [rule])

    assert [(f.line, f.message) for f in findings] == [(2, "Region Setup")]
    assert source.line(2) == "#region Setup"


def test_crlf_line_endings_are_stripped():
    source = SourceFile(path="a.cs", text="var a = 1;\r\n// HACK\r\n")

    assert source.lines == ["var a = 1;", "// HACK"]


class _FarLineRule(FileRule):
    def __init__(self):
        super().__init__(id="far", message="far away")

    def evaluate(self, source):
        yield 5, self.message


def test_rule_reporting_line_past_end_of_file_raises():
    with pytest.raises(ValueError, match="far"):
        scan(SourceFile(path="a.cs", text="var a = 1;\n"), [_FarLineRule()])
