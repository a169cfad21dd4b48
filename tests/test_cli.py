"""
Tests for the command-line interface.
"""

import json

from htmlquill.cli import create_parser, main
from htmlquill.version import __version__


class TestCreateParser:
    """Test cases for argument parsing."""

    def test_convert_defaults(self):
        args = create_parser().parse_args(["convert", "page.html"])
        assert args.command == "convert"
        assert args.page_size == "A4"
        assert args.margin == 50.0
        assert args.output is None
        assert args.theme is None

    def test_convert_options(self):
        args = create_parser().parse_args([
            "--log-level", "DEBUG", "convert", "page.html", "-o", "out.pdf",
            "--page-size", "LETTER", "--margin", "36", "--theme", "theme.json",
        ])
        assert args.log_level == "DEBUG"
        assert args.output == "out.pdf"
        assert args.page_size == "LETTER"
        assert args.margin == 36.0
        assert args.theme == "theme.json"


class TestMain:
    """Test cases for main."""

    def test_convert(self, temp_dir, capsys):
        html_path = temp_dir / "page.html"
        html_path.write_text("<p>Hello</p>", encoding="utf-8")
        output = temp_dir / "result.pdf"

        exit_code = main(["convert", str(html_path), "-o", str(output)])

        assert exit_code == 0
        assert output.read_bytes().startswith(b"%PDF")
        assert str(output) in capsys.readouterr().out

    def test_convert_default_output(self, temp_dir):
        html_path = temp_dir / "page.html"
        html_path.write_text("<p>Hello</p>", encoding="utf-8")

        assert main(["convert", str(html_path)]) == 0
        assert (temp_dir / "page.pdf").exists()

    def test_convert_with_theme(self, temp_dir):
        html_path = temp_dir / "page.html"
        html_path.write_text('<ul><li class="note">Hello</li></ul>', encoding="utf-8")
        theme_path = temp_dir / "theme.json"
        theme_path.write_text(json.dumps({"class_text_alignments": {"note": "right"}, "bullet": "- "}), encoding="utf-8")

        assert main(["convert", str(html_path), "--theme", str(theme_path), "--page-size", "LETTER", "--margin", "20"]) == 0

    def test_missing_input(self, temp_dir):
        assert main(["convert", str(temp_dir / "missing.html")]) == 1

    def test_invalid_theme(self, temp_dir):
        html_path = temp_dir / "page.html"
        html_path.write_text("<p>Hello</p>", encoding="utf-8")
        theme_path = temp_dir / "theme.json"
        theme_path.write_text("[broken", encoding="utf-8")

        assert main(["convert", str(html_path), "--theme", str(theme_path)]) == 1

    def test_layout(self, temp_dir, capsys):
        html_path = temp_dir / "page.html"
        html_path.write_text("<ol><li>first</li></ol>", encoding="utf-8")

        assert main(["layout", str(html_path)]) == 0
        assert "first" in capsys.readouterr().out

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert f"htmlquill v{__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
