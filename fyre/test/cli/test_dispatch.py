"""Tests for fyre.cli.dispatch module."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from fyre.cli.context import CLIContext
from fyre.cli.dispatch import HANDLERS, dispatch, run_descriptor
from fyre.cli.registry import CommandDescriptor, CommandKind, menu_lines
from fyre.cli.selector import SelectorResult
from fyre.core.errors import ErrorCode
from fyre.core.result import Err, Ok
from fyre.output.console import MockConsole
from fyre.test._fakes import RecordingOpener, RecordingRunner, pick, scripted_select


def _d(kind: CommandKind, argument: str | None = None) -> CommandDescriptor:
    return CommandDescriptor(kind, argument)


def test_every_kind_has_a_handler() -> None:
    assert set(HANDLERS) == set(CommandKind)


class TestProjectGuard:
    @pytest.mark.parametrize(
        "descriptor",
        [
            _d(CommandKind.CLEAN),
            _d(CommandKind.FIX),
            _d(CommandKind.GENERATE, "swagger"),
            _d(CommandKind.WATCH),
            _d(CommandKind.RELEASE, "beta"),
            _d(CommandKind.RELEASE, "staging"),
            _d(CommandKind.BUMP, "patch"),
        ],
    )
    def test_outside_project_exits_before_any_tool(
        self,
        outside_dir: Path,
        ctx: CLIContext,
        runner: RecordingRunner,
        console: MockConsole,
        descriptor: CommandDescriptor,
    ) -> None:
        with pytest.raises(typer.Exit) as exc:
            run_descriptor(descriptor, ctx)

        assert exc.value.exit_code == int(ErrorCode.FAILURE)
        assert runner.calls == []
        assert "This is not a flutter project..." in console.messages

    def test_open_is_not_gated(
        self, outside_dir: Path, ctx: CLIContext, opener: RecordingOpener
    ) -> None:
        assert dispatch(_d(CommandKind.OPEN, "apple"), ctx) == Ok(None)
        assert opener.urls == ["https://appstoreconnect.apple.com/apps"]

    def test_open_ignores_stray_toml(
        self, outside_dir: Path, ctx: CLIContext, opener: RecordingOpener
    ) -> None:
        (outside_dir / "fyre.toml").write_text("[urls\n")
        assert dispatch(_d(CommandKind.OPEN, "google"), ctx) == Ok(None)
        assert opener.urls == ["https://play.google.com/console/u/0/developers/"]

    def test_help_is_not_gated(self, outside_dir: Path, ctx: CLIContext, console: MockConsole) -> None:
        assert dispatch(_d(CommandKind.HELP), ctx) == Ok(None)
        assert "Command | Description" in console.messages
        assert "f clean | Deep cleans the project and rebuilds it" in console.messages


class TestWorkflows:
    def test_clean(self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner) -> None:
        assert dispatch(_d(CommandKind.CLEAN), ctx) == Ok(None)
        assert runner.commands == ["flutter clean", "flutter pub get"]

    def test_fix(self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner) -> None:
        assert dispatch(_d(CommandKind.FIX), ctx) == Ok(None)
        assert runner.commands == ["dart fix --apply"]

    def test_generate_assets(self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner) -> None:
        assert dispatch(_d(CommandKind.GENERATE, "assets"), ctx) == Ok(None)
        assert runner.commands == ["fluttergen -c pubspec.yaml"]

    def test_generate_unknown_kind(self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner) -> None:
        result = dispatch(_d(CommandKind.GENERATE, "docs"), ctx)
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_argument"
        assert runner.calls == []

    def test_watch(self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner) -> None:
        assert dispatch(_d(CommandKind.WATCH), ctx) == Ok(None)
        assert runner.commands == ["dart run build_runner watch --delete-conflicting-outputs"]

    def test_stopping_watch_is_silent_and_exits_130(
        self, project_dir: Path, console: MockConsole
    ) -> None:
        runner = RecordingRunner(interrupt_on="dart run build_runner watch --delete-conflicting-outputs")
        ctx = CLIContext(console=console, runner=runner)

        with pytest.raises(typer.Exit) as exc:
            run_descriptor(_d(CommandKind.WATCH), ctx)

        assert exc.value.exit_code == int(ErrorCode.INTERRUPTED)
        assert console.messages == ["$ dart run build_runner watch --delete-conflicting-outputs"]
        assert not console.has_error()

    def test_failing_watch_is_reported(self, project_dir: Path, console: MockConsole) -> None:
        runner = RecordingRunner(fail_on="dart run build_runner watch --delete-conflicting-outputs")
        ctx = CLIContext(console=console, runner=runner)

        with pytest.raises(typer.Exit) as exc:
            run_descriptor(_d(CommandKind.WATCH), ctx)

        assert exc.value.exit_code == int(ErrorCode.FAILURE)
        assert " Something went wrong while executing this:" in console.messages


class TestRelease:
    @pytest.mark.parametrize(
        ("track", "lane"),
        [("beta", "beta"), ("production", "release"), ("release", "release")],
    )
    def test_supported_tracks(
        self,
        project_dir: Path,
        ctx: CLIContext,
        runner: RecordingRunner,
        track: str,
        lane: str,
    ) -> None:
        (project_dir / "ios").mkdir()

        assert dispatch(_d(CommandKind.RELEASE, track), ctx) == Ok(None)

        assert runner.commands == ["pod install", f"fastlane ios {lane}"]
        assert all(cwd == (project_dir / "ios").resolve() for _, cwd in runner.calls)
        assert Path.cwd() == project_dir.resolve()

    def test_unsupported_track_is_soft(
        self, project_dir: Path, ctx: CLIContext, runner: RecordingRunner, console: MockConsole
    ) -> None:
        run_descriptor(_d(CommandKind.RELEASE, "staging"), ctx)

        assert runner.calls == []
        assert "Not ready for staging yet" in console.messages

    def test_failing_pod_install_aborts_and_restores_directory(
        self, project_dir: Path, console: MockConsole
    ) -> None:
        (project_dir / "ios").mkdir()
        runner = RecordingRunner(fail_on="pod install")
        ctx = CLIContext(console=console, runner=runner)

        with pytest.raises(typer.Exit) as exc:
            run_descriptor(_d(CommandKind.RELEASE, "beta"), ctx)

        assert exc.value.exit_code == int(ErrorCode.FAILURE)
        assert runner.commands == ["pod install"]
        assert "  $ pod install" in console.messages
        assert Path.cwd() == project_dir.resolve()

    def test_missing_ios_directory(self, project_dir: Path, ctx: CLIContext) -> None:
        result = dispatch(_d(CommandKind.RELEASE, "beta"), ctx)
        assert isinstance(result, Err)
        assert result.error.kind == "missing_directory"


class TestOpen:
    def test_aliases_open_identical_urls(self, outside_dir: Path, ctx: CLIContext, opener: RecordingOpener) -> None:
        dispatch(_d(CommandKind.OPEN, "android"), ctx)
        dispatch(_d(CommandKind.OPEN, "google"), ctx)
        assert opener.urls[0] == opener.urls[1] == "https://play.google.com/console/u/0/developers/"

    def test_unknown_service(
        self, outside_dir: Path, ctx: CLIContext, opener: RecordingOpener, console: MockConsole
    ) -> None:
        run_descriptor(_d(CommandKind.OPEN, "unknown"), ctx)
        assert opener.urls == []
        assert "Don't recognise the service: unknown" in console.messages

    def test_browser_failure(self, outside_dir: Path, console: MockConsole) -> None:
        ctx = CLIContext(console=console, opener=RecordingOpener(result=False))
        result = dispatch(_d(CommandKind.OPEN, "apple"), ctx)
        assert isinstance(result, Err)
        assert result.error.kind == "io_error"


class TestBump:
    def test_minor(self, project_dir: Path, ctx: CLIContext, console: MockConsole) -> None:
        run_descriptor(_d(CommandKind.BUMP, "minor"), ctx)

        assert (project_dir / "pubspec.yaml").read_text() == "name: demo\nversion: 1.3.0+8\n"
        assert "from: 1.2.3+7" in console.messages
        assert "to:   1.3.0+8" in console.messages

    def test_invalid_component_is_fatal(
        self, project_dir: Path, ctx: CLIContext, console: MockConsole
    ) -> None:
        with pytest.raises(typer.Exit) as exc:
            run_descriptor(_d(CommandKind.BUMP, "huge"), ctx)

        assert exc.value.exit_code == int(ErrorCode.FAILURE)
        assert "error: Invalid update type: huge" in console.messages
        assert (project_dir / "pubspec.yaml").read_text() == "name: demo\nversion: 1.2.3+7\n"

    def test_missing_version_line(self, project_dir: Path, ctx: CLIContext) -> None:
        (project_dir / "pubspec.yaml").write_text("name: demo\n")

        with pytest.raises(typer.Exit) as exc:
            run_descriptor(_d(CommandKind.BUMP, "patch"), ctx)

        assert exc.value.exit_code == int(ErrorCode.FAILURE)
        assert (project_dir / "pubspec.yaml").read_text() == "name: demo\n"


class TestSearch:
    def _ctx(self, console: MockConsole, runner: RecordingRunner, select: object) -> CLIContext:
        return CLIContext(console=console, runner=runner, select=select)  # type: ignore[arg-type]

    def test_menu_matches_registry(self, outside_dir: Path, console: MockConsole, runner: RecordingRunner) -> None:
        select = scripted_select(SelectorResult(action="cancel", value=None))
        dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, select))

        shown = select.seen[0]  # type: ignore[attr-defined]
        assert [o.value for o in shown] == menu_lines()

    def test_selection_matches_typed_command(
        self, project_dir: Path, console: MockConsole
    ) -> None:
        typed = RecordingRunner()
        dispatch(_d(CommandKind.CLEAN), CLIContext(console=console, runner=typed))

        searched = RecordingRunner()
        select = pick("clean - Deep cleans the project and rebuilds it")
        result = dispatch(_d(CommandKind.SEARCH), self._ctx(console, searched, select))

        assert result == Ok(None)
        assert searched.calls == typed.calls
        assert "Executing: clean" in console.messages

    def test_selected_release_track(self, project_dir: Path, console: MockConsole, runner: RecordingRunner) -> None:
        (project_dir / "ios").mkdir()
        select = pick("release production - Release to production track")

        assert dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, select)) == Ok(None)
        assert runner.commands == ["pod install", "fastlane ios release"]

    def test_selection_is_still_project_guarded(
        self, outside_dir: Path, console: MockConsole, runner: RecordingRunner
    ) -> None:
        select = pick("fix - Apply automatic fixes to Dart code")
        result = dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, select))

        assert isinstance(result, Err)
        assert result.error.kind == "not_a_project"
        assert runner.calls == []

    def test_cancel_is_silent(self, outside_dir: Path, console: MockConsole, runner: RecordingRunner) -> None:
        select = scripted_select(SelectorResult(action="cancel", value=None))
        assert dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, select)) == Ok(None)
        assert console.messages == []

    def test_unimplemented_pattern(self, outside_dir: Path, console: MockConsole, runner: RecordingRunner) -> None:
        select = pick("deploy - Ship it")
        assert dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, select)) == Ok(None)
        assert "Command not implemented in fuzzy search" in console.messages

    def test_without_terminal(self, outside_dir: Path, console: MockConsole, runner: RecordingRunner) -> None:
        def no_tty(**_: object) -> SelectorResult[str]:
            raise RuntimeError("interactive selector requires a TTY")

        result = dispatch(_d(CommandKind.SEARCH), self._ctx(console, runner, no_tty))
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_argument"
