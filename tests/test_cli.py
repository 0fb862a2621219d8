from __future__ import annotations

import textwrap
from pathlib import Path

import mdx_format.cli as cli_module
from mdx_format.cli import cli
from mdx_format.filesystem import MAX_FILE_SIZE_ENV_VAR
from mdx_format.models import FormatResult

UNFORMATTED = """
<Steps>
<Step>Install</Step>
</Steps>
"""

FORMATTED = "<Steps>\n    <Step>\n        Install\n    </Step>\n</Steps>\n"


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_formatted_document(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == FORMATTED
    assert target.read_text(encoding="utf-8") == "<Steps>\n<Step>Install</Step>\n</Steps>\n"


def test_cli_rewrites_file_in_place(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, ["--in-place", str(target)])

    assert result.exit_code == 0
    assert result.output == ""
    assert target.read_text(encoding="utf-8") == FORMATTED


def test_cli_in_place_keeps_crlf(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "doc.mdx"
    target.write_bytes(b"<Card>\r\ntext\r\n</Card>\r\n")

    result = cli_runner.invoke(cli, ["-i", str(target)])

    assert result.exit_code == 0
    assert target.read_bytes() == b"<Card>\r\n    text\r\n</Card>\r\n"


def test_cli_in_place_skips_formatted_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "doc.mdx"
    target.write_text(FORMATTED, encoding="utf-8")

    def _fail(*args, **kwargs):
        raise AssertionError("formatted file must not be rewritten")

    monkeypatch.setattr(cli_module, "write_document", _fail)

    result = cli_runner.invoke(cli, ["--in-place", str(target)])

    assert result.exit_code == 0


def test_cli_check_reports_unformatted_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, ["--check", str(target)])

    assert result.exit_code == 1
    assert "would be reformatted" in result.output


def test_cli_check_accepts_formatted_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "doc.mdx"
    target.write_text(FORMATTED, encoding="utf-8")

    result = cli_runner.invoke(cli, ["--check", str(target)])

    assert result.exit_code == 0
    assert result.output == ""


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mdx-format]
        indent_width = 2
        """,
    )
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<Steps>\n  <Step>\n    Install\n  </Step>\n</Steps>\n"


def test_cli_flags_override_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mdx-format]
        indent_width = 2
        """,
    )
    target = _write(tmp_path, "doc.mdx", "<Card>\ntext\n</Card>\n")

    result = cli_runner.invoke(cli, ["--indent-width", "3", str(target)])

    assert result.exit_code == 0
    assert result.output == "<Card>\n   text\n</Card>\n"


def test_cli_use_tabs(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.mdx", "<Card>\ntext\n</Card>\n")

    result = cli_runner.invoke(cli, ["--use-tabs", str(target)])

    assert result.exit_code == 0
    assert result.output == "<Card>\n\ttext\n</Card>\n"


def test_cli_disabled_by_config_leaves_file_alone(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mdx-format]
        enable = false
        """,
    )
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, ["--check", str(target)])

    assert result.exit_code == 0


def test_cli_rejects_non_markdown_files(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "notes.txt", "text\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "not an MDX or Markdown file" in result.output


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mdx-format]
        indent_width = 0
        """,
    )
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "indent_width" in result.output


def test_cli_rejects_file_over_size_limit(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "5")
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size" in result.output


def test_cli_reports_formatting_failure(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "doc.mdx", UNFORMATTED)

    def _fail(text, options=None, **kwargs):
        return FormatResult(text=text, error="boom")

    monkeypatch.setattr(cli_module, "format_text", _fail)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "MDX formatter error: boom" in result.output
