"""
Tests for the stylequill command-line interface.
"""

import pytest
from lxml import etree

from stylequill import Document
from stylequill.cli import create_parser, main


@pytest.fixture
def document_file(temp_dir, sample_document):
    path = temp_dir / "document.xml"
    path.write_text(sample_document.to_xml(), encoding="utf-8")
    return path


class TestCli:
    """Test cases for CLI commands and exit codes."""

    def test_parser_commands(self):
        args = create_parser().parse_args(["apply", "s.xml", "d.xml", "--map", "h1=Title", "--map", "table=Grid"])

        assert args.command == "apply"
        assert args.map == ["h1=Title", "table=Grid"]
        assert args.style_set is None

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert "stylequill v0.1.0" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_invalid_log_level(self, capsys):
        assert main(["--log-level", "LOUD", "version"]) == 2

    def test_check(self, definitions_file, capsys):
        assert main(["--no-rich", "check", str(definitions_file)]) == 0

        out = capsys.readouterr().out
        assert "OK 4 styles, 1 style sets" in out

    def test_check_missing_file(self, temp_dir, capsys):
        assert main(["check", str(temp_dir / "missing.xml")]) == 1
        assert "file_not_found" in capsys.readouterr().err

    def test_export_to_stdout(self, definitions_file, capsys):
        assert main(["export", str(definitions_file)]) == 0
        assert "<w:styles" in capsys.readouterr().out

    def test_export_to_file(self, definitions_file, temp_dir):
        output = temp_dir / "styles.xml"

        assert main(["export", str(definitions_file), "-o", str(output), "--builtins"]) == 0

        root = etree.fromstring(output.read_bytes())
        assert len(root) == 12

    def test_diff(self, definitions_file, capsys):
        assert main(["diff", str(definitions_file), "Heading 1", "Heading 2", "--builtins"]) == 0
        assert "character.font_size_pts: 16.0 vs 14.0" in capsys.readouterr().out

    def test_diff_unknown_style(self, definitions_file, capsys):
        assert main(["diff", str(definitions_file), "Body", "Nope"]) == 1
        assert "style_not_found" in capsys.readouterr().err

    def test_builtins(self, capsys):
        assert main(["builtins"]) == 0

        out = capsys.readouterr().out
        assert "Normal" in out
        assert "Code" in out

    def test_apply_style_set(self, definitions_file, document_file, temp_dir):
        output = temp_dir / "out.xml"

        code = main(["apply", str(definitions_file), str(document_file), "--set", "Report", "-o", str(output)])

        assert code == 0
        document = Document.from_xml(output.read_bytes())
        assert [p.get_style() for p in document.paragraphs()] == ["Heading 1", "Body", "Normal", "Body"]
        assert document.tables()[0].get_style() == "Grid"
        assert [r.get_style() for r in document.runs()] == ["Emphasis", "Emphasis", "Code", "Emphasis"]

    def test_apply_mappings_in_place(self, definitions_file, document_file):
        code = main(["apply", str(definitions_file), str(document_file), "--map", "heading1=Title"])

        assert code == 0
        document = Document.from_xml(document_file.read_bytes())
        assert document.paragraphs()[0].get_style() == "Title"

    def test_apply_requires_set_or_map(self, definitions_file, document_file):
        assert main(["apply", str(definitions_file), str(document_file)]) == 2

    def test_apply_bad_mapping(self, definitions_file, document_file):
        assert main(["apply", str(definitions_file), str(document_file), "--map", "heading1"]) == 2

    def test_apply_missing_target_style(self, definitions_file, document_file, capsys):
        before = document_file.read_text(encoding="utf-8")

        assert main(["apply", str(definitions_file), str(document_file), "--map", "heading1=Missing"]) == 1
        assert document_file.read_text(encoding="utf-8") == before

    def test_apply_partial_failure_still_saves(self, definitions_file, document_file, temp_dir, capsys):
        output = temp_dir / "out.xml"

        code = main(["apply", str(definitions_file), str(document_file),
                     "--map", "heading1=Title", "--map", "table=Body", "-o", str(output)])

        assert code == 1
        document = Document.from_xml(output.read_bytes())
        assert document.paragraphs()[0].get_style() == "Title"
        assert document.tables()[0].get_style() is None
        captured = capsys.readouterr()
        assert "Saved:" in captured.out
        assert "1 failure" in captured.err
        assert "failed:" in captured.err

    def test_apply_missing_document(self, definitions_file, temp_dir):
        assert main(["apply", str(definitions_file), str(temp_dir / "none.xml"), "--set", "Report"]) == 1
