"""Tests for the Rich printer result sink."""

import io

from rich.console import Console

from hookguard.hooks import HookStatus
from hookguard.output import Printer


class StubHook:
    def __init__(self, name, description=""):
        self.name = name
        self.description = description


def make_printer(quiet=False):
    buf = io.StringIO()
    console = Console(file=buf, width=120, color_system=None)
    return Printer("pre-commit", console=console, quiet=quiet), buf


class TestPrinter:
    def test_start_run(self):
        p, buf = make_printer()
        p.start_run()
        assert "Running pre-commit hooks" in buf.getvalue()

    def test_nothing_to_run(self):
        p, buf = make_printer()
        p.nothing_to_run()
        assert "No pre-commit hooks enabled" in buf.getvalue()

    def test_passing_hook_line(self):
        p, buf = make_printer()
        p.end_hook(StubHook("lint", "Run linter"), HookStatus.PASS, "ignored output")
        out = buf.getvalue()
        assert "Run linter" in out
        assert "[lint]" in out
        assert "OK" in out
        assert "ignored output" not in out

    def test_failing_hook_shows_output(self):
        p, buf = make_printer()
        p.end_hook(StubHook("lint"), HookStatus.FAIL, "a.py:1: bad\na.py:2: worse\n")
        out = buf.getvalue()
        assert "FAILED" in out
        assert "  a.py:1: bad" in out
        assert "  a.py:2: worse" in out

    def test_output_with_brackets_not_treated_as_markup(self):
        p, buf = make_printer()
        p.end_hook(StubHook("lint"), HookStatus.WARN, "[bold]literal[/bold]")
        assert "[bold]literal[/bold]" in buf.getvalue()

    def test_quiet_hides_passing(self):
        p, buf = make_printer(quiet=True)
        p.start_run()
        p.end_hook(StubHook("lint"), HookStatus.PASS, "")
        p.run_succeeded()
        assert buf.getvalue() == ""

    def test_quiet_still_shows_failures(self):
        p, buf = make_printer(quiet=True)
        p.end_hook(StubHook("lint"), HookStatus.FAIL, "")
        p.run_failed()
        out = buf.getvalue()
        assert "FAILED" in out
        assert "hooks failed" in out

    def test_skip_notices(self):
        p, buf = make_printer()
        p.hook_skipped(StubHook("lint"))
        p.required_hook_not_skipped(StubHook("secrets"))
        out = buf.getvalue()
        assert "Skipping lint" in out
        assert "Cannot skip secrets since it is required" in out

    def test_verdicts(self):
        p, buf = make_printer()
        p.run_succeeded()
        p.run_warned()
        p.run_failed()
        p.run_interrupted()
        out = buf.getvalue()
        assert "All pre-commit hooks passed" in out
        assert "with warnings" in out
        assert "One or more pre-commit hooks failed" in out
        assert "interrupted" in out
