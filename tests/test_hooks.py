"""Tests for hook units: Hook base class, registry, built-in hooks."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from hookguard.core.config import Config
from hookguard.core.errors import InvalidHookDefinition
from hookguard.hooks import Hook, HookContext, HookRegistry, HookStatus, HookUnit
from hookguard.hooks.builtin import CommandHook, MergeConflicts, TrailingWhitespace


class FilesContext(HookContext):
    def __init__(self, root, files):
        super().__init__("pre-commit", root)
        self.files = files

    def modified_files(self):
        return self.files


class Fixed(Hook):
    def __init__(self, *args, result=HookStatus.PASS, **kwargs):
        super().__init__(*args, **kwargs)
        self.result = result

    def run(self):
        return self.result


def make(cls=Fixed, settings=None, files=(), root=None, config=None, **kwargs):
    return cls(
        "check",
        settings or {},
        FilesContext(Path(root or "."), list(files)),
        config or Config(),
        **kwargs,
    )


# ── Hook base ───────────────────────────────────────────────────────


class TestHookFlags:
    def test_defaults(self):
        h = make()
        assert h.enabled() is True
        assert h.required() is False
        assert h.skip_requested() is False
        assert h.would_run() is True

    def test_satisfies_protocol(self):
        assert isinstance(make(), HookUnit)

    def test_disabled(self):
        h = make(settings={"enabled": False})
        assert h.enabled() is False
        assert h.would_run() is False

    def test_skip_from_settings(self):
        assert make(settings={"skip": True}).skip_requested() is True

    def test_skip_from_env_list(self):
        config = Config(skipped_hooks={"check"})
        assert make(config=config).skip_requested() is True

    def test_requires_files_without_files(self):
        h = make(settings={"requires_files": True})
        assert h.would_run() is False

    def test_requires_files_with_files(self):
        h = make(settings={"requires_files": True}, files=["a.py"])
        assert h.would_run() is True

    def test_description(self):
        assert make().description == "Run check"
        assert make(settings={"description": "Lint it"}).description == "Lint it"


class TestApplicableFiles:
    def test_include(self):
        h = make(settings={"include": ["*.py"]}, files=["a.py", "b.js", "pkg/c.py"])
        assert h.applicable_files() == ["a.py", "pkg/c.py"]

    def test_exclude(self):
        h = make(settings={"exclude": "vendor/*"}, files=["a.py", "vendor/x.py"])
        assert h.applicable_files() == ["a.py"]

    def test_no_filters(self):
        assert make(files=["x", "y"]).applicable_files() == ["x", "y"]


class TestTransform:
    def test_plain_status(self):
        assert make().run_and_transform() == (HookStatus.PASS, "")

    def test_tuple_result(self):
        h = make(result=(HookStatus.WARN, "careful"))
        assert h.run_and_transform() == (HookStatus.WARN, "careful")

    def test_string_status_accepted(self):
        assert make(result="fail").run_and_transform()[0] is HookStatus.FAIL

    def test_on_fail_downgrade(self):
        h = make(settings={"on_fail": "warn"}, result=(HookStatus.FAIL, "x"))
        assert h.run_and_transform() == (HookStatus.WARN, "x")

    def test_on_warn_upgrade(self):
        h = make(settings={"on_warn": "fail"}, result=HookStatus.WARN)
        assert h.run_and_transform()[0] is HookStatus.FAIL

    def test_on_fail_leaves_pass_alone(self):
        h = make(settings={"on_fail": "warn"})
        assert h.run_and_transform()[0] is HookStatus.PASS

    def test_invalid_override(self):
        with pytest.raises(InvalidHookDefinition, match="on_fail"):
            make(settings={"on_fail": "maybe"})

    def test_missing_required_executable(self):
        h = make(settings={"required_executable": "surely-not-installed-tool"})
        status, output = h.run_and_transform()
        assert status is HookStatus.FAIL
        assert "surely-not-installed-tool" in output

    def test_present_required_executable(self):
        with patch("hookguard.hooks.base.shutil.which", return_value="/usr/bin/tool"):
            h = make(settings={"required_executable": "tool"})
            assert h.run_and_transform()[0] is HookStatus.PASS

    def test_base_run_not_implemented(self):
        h = make(cls=Hook)
        with pytest.raises(NotImplementedError):
            h.run_and_transform()


class TestCommand:
    def test_list_with_flags(self):
        h = make(settings={"command": ["ruff", "check"], "flags": ["--quiet"]})
        assert h.command == ["ruff", "check", "--quiet"]

    def test_string_is_split(self):
        h = make(settings={"command": "ruff check 'a b'"})
        assert h.command == ["ruff", "check", "a b"]


# ── Registry ────────────────────────────────────────────────────────


class TestHookRegistry:
    def test_register_and_get(self):
        reg = HookRegistry()

        @reg.register("fixed")
        class A(Fixed):
            pass

        assert reg.get("fixed") is A
        assert "fixed" in reg
        assert reg.names() == ["fixed"]

    def test_later_registration_overrides(self):
        reg = HookRegistry()

        @reg.register("x")
        class First(Fixed):
            pass

        @reg.register("x")
        class Second(Fixed):
            pass

        assert reg.get("x") is Second

    def test_unknown(self):
        assert HookRegistry().get("nope") is None

    def test_builtins_registered(self):
        from hookguard.hooks import registry

        for name in ("command", "trailing-whitespace", "merge-conflicts"):
            assert name in registry


# ── Built-in hooks ──────────────────────────────────────────────────


class TestCommandHook:
    def test_pass(self, tmp_path):
        h = make(CommandHook, {"command": [sys.executable, "-c", "pass"]}, root=tmp_path)
        assert h.run_and_transform() == (HookStatus.PASS, "")

    def test_fail_collects_output(self, tmp_path):
        code = "import sys; print('out'); sys.stderr.write('err\\n'); sys.exit(1)"
        h = make(CommandHook, {"command": [sys.executable, "-c", code]}, root=tmp_path)
        status, output = h.run_and_transform()
        assert status is HookStatus.FAIL
        assert "out" in output
        assert "err" in output

    def test_runs_in_repo_root(self, tmp_path):
        code = "import os, sys; sys.exit(0 if os.path.exists('marker') else 1)"
        (tmp_path / "marker").touch()
        h = make(CommandHook, {"command": [sys.executable, "-c", code]}, root=tmp_path)
        assert h.run_and_transform()[0] is HookStatus.PASS

    def test_pass_files(self, tmp_path):
        code = "import sys; sys.exit(0 if sys.argv[1:] == ['a.py'] else 1)"
        h = make(
            CommandHook,
            {"command": [sys.executable, "-c", code], "pass_files": True, "include": "*.py"},
            files=["a.py", "b.md"],
            root=tmp_path,
        )
        assert h.run_and_transform()[0] is HookStatus.PASS

    def test_no_command(self):
        with pytest.raises(InvalidHookDefinition):
            make(CommandHook, {}).run_and_transform()


class TestTrailingWhitespace:
    def test_clean(self, tmp_path):
        (tmp_path / "a.py").write_text("x = 1\n")
        h = make(TrailingWhitespace, files=["a.py"], root=tmp_path)
        assert h.run_and_transform() == (HookStatus.PASS, "")

    def test_reports_lines(self, tmp_path):
        (tmp_path / "a.py").write_text("x = 1\ny = 2  \nz = 3\t\n")
        h = make(TrailingWhitespace, files=["a.py"], root=tmp_path)
        status, output = h.run_and_transform()
        assert status is HookStatus.FAIL
        assert output == "a.py:2: trailing whitespace\na.py:3: trailing whitespace"

    def test_skips_binary_and_missing(self, tmp_path):
        (tmp_path / "b.bin").write_bytes(b"\0 \n")
        h = make(TrailingWhitespace, files=["b.bin", "gone.py"], root=tmp_path)
        assert h.run_and_transform()[0] is HookStatus.PASS

    def test_needs_files(self, tmp_path):
        assert make(TrailingWhitespace, root=tmp_path).would_run() is False


class TestMergeConflicts:
    def test_detects_markers(self, tmp_path):
        (tmp_path / "a.txt").write_text("ok\n<<<<<<< HEAD\nmine\n=======\ntheirs\n>>>>>>> branch\n")
        h = make(MergeConflicts, files=["a.txt"], root=tmp_path)
        status, output = h.run_and_transform()
        assert status is HookStatus.FAIL
        assert output.splitlines() == [
            "a.txt:2: merge conflict marker",
            "a.txt:4: merge conflict marker",
            "a.txt:6: merge conflict marker",
        ]

    def test_ignores_lookalikes(self, tmp_path):
        (tmp_path / "a.md").write_text("Title\n========\n<<<<<<<< not eight\n")
        h = make(MergeConflicts, files=["a.md"], root=tmp_path)
        assert h.run_and_transform()[0] is HookStatus.PASS
