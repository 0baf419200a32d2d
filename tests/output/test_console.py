"""Tests for Rich Console factory and theme."""

from io import StringIO

from passhash.output.console import PASSHASH_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[ph.error]boom[/ph.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80

    def test_theme_styles(self) -> None:
        for name in ("ph.ok", "ph.error", "ph.tag", "ph.secret", "ph.script"):
            assert name in PASSHASH_THEME.styles


class TestGetOutput:
    def test_extracts_printed_text(self) -> None:
        console = create_console(no_color=True)
        console.print("hello world")
        assert "hello world" in get_output(console)

    def test_empty_console(self) -> None:
        assert get_output(create_console()) == ""
