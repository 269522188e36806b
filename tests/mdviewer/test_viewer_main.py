"""Tests for the command line entry point."""

import logging
import os
import sys

import pytest

from mdlayout.layout_style import TextStyle, heading_band_color
from mdviewer.__main__ import cleanup_old_logs, load_settings, main
from mdviewer.viewer_settings import ViewerSettings
from terminal.terminal_ansi import ANSI_RESET, style_prefix


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point the home directory at a temporary one and restore global state."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    root = logging.getLogger()
    level = root.level
    yield home
    root.setLevel(level)


@pytest.fixture
def sample_file(tmp_path):
    """Create a one paragraph markdown file."""
    path = tmp_path / "sample.md"
    path.write_text("hello world\n", encoding="utf-8")
    return path


class TestDumpModes:
    """Test non-interactive output."""

    def test_dump_prints_rendered_lines(self, isolated_home, sample_file, capsys):
        """Test rendering to standard output."""
        assert main([str(sample_file), "--dump", "--width", "20"]) == 0
        assert capsys.readouterr().out == "hello world\n"

    def test_dump_wraps_to_width(self, isolated_home, sample_file, capsys):
        """Test that --width controls wrapping."""
        assert main([str(sample_file), "--dump", "--width", "5"]) == 0
        assert capsys.readouterr().out == "hello\nworld\n"

    def test_dump_ast(self, isolated_home, sample_file, capsys):
        """Test printing the parsed tree."""
        assert main([str(sample_file), "--dump-ast"]) == 0
        assert capsys.readouterr().out == "Document (1 blocks)\n  Paragraph: 'hello world'\n"

    def test_dump_fills_heading_band_to_width(self, isolated_home, tmp_path, capsys):
        """Test that heading bands span the whole render width."""
        path = tmp_path / "heading.md"
        path.write_text("# Hi\n", encoding="utf-8")
        assert main([str(path), "--dump", "--width", "20"]) == 0
        band = style_prefix(TextStyle(bg=heading_band_color(1)))
        assert capsys.readouterr().out.endswith(f"{band}{' ' * 18}{ANSI_RESET}\n")

    def test_dump_does_not_clip_code(self, isolated_home, tmp_path, capsys):
        """Test that code wider than the render width is written whole."""
        path = tmp_path / "code.md"
        path.write_text("```\n" + "x" * 30 + "\n```\n", encoding="utf-8")
        assert main([str(path), "--dump", "--width", "10"]) == 0
        assert "x" * 30 in capsys.readouterr().out

    def test_logs_are_written_under_home(self, isolated_home, sample_file):
        """Test that the log directory is created."""
        main([str(sample_file), "--dump", "--width", "20"])
        assert (isolated_home / ".mdview" / "logs").is_dir()


class TestErrors:
    """Test failure exit codes."""

    def test_missing_file_exits_with_one(self, isolated_home, tmp_path, capsys):
        """Test a startup failure."""
        assert main([str(tmp_path / "absent.md"), "--dump"]) == 1
        assert capsys.readouterr().err.startswith("mdview: Cannot read")

    def test_invalid_utf8_exits_with_one(self, isolated_home, tmp_path, capsys):
        """Test a parse failure at startup."""
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff")
        assert main([str(path), "--dump"]) == 1
        assert "mdview:" in capsys.readouterr().err

    def test_bad_width_is_usage_error(self, isolated_home, sample_file):
        """Test argument validation."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_file), "--dump", "--width", "0"])

        assert exc_info.value.code == 2

    def test_missing_path_is_usage_error(self, isolated_home):
        """Test that a path is required."""
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2


class TestSettingsLoading:
    """Test settings fallbacks."""

    def test_no_settings_file_gives_defaults(self, isolated_home):
        """Test the default location when nothing is there."""
        assert load_settings(None) == ViewerSettings.create_default()

    def test_invalid_settings_file_gives_defaults(self, tmp_path):
        """Test that broken JSON does not stop the viewer."""
        path = tmp_path / "settings.json"
        path.write_text("{", encoding="utf-8")
        assert load_settings(str(path)) == ViewerSettings.create_default()

    def test_undecodable_settings_file_gives_defaults(self, tmp_path):
        """Test that a settings file that is not UTF-8 does not stop the viewer."""
        path = tmp_path / "settings.json"
        path.write_bytes(b"\xff\xfe{")
        assert load_settings(str(path)) == ViewerSettings.create_default()

    def test_settings_file_is_used(self, tmp_path):
        """Test an explicit settings file."""
        path = tmp_path / "settings.json"
        path.write_text('{"tabWidth": 2}', encoding="utf-8")
        assert load_settings(str(path)).tab_width == 2

    def test_cleanup_old_logs(self, tmp_path):
        """Test pruning log files down to a maximum."""
        for i in range(5):
            (tmp_path / f"{i}.log").write_text("x", encoding="utf-8")

        cleanup_old_logs(str(tmp_path), max_logs=3)
        assert len(os.listdir(tmp_path)) == 3
