"""Tests for the test plan executor."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from mdtest.core.executor import ExecutorState, TestPlanExecutor, run
from mdtest.errors import MissingFile, ShellScriptFailure, StepFailure
from mdtest.models import FenceEnd, FenceStart, Other, StepKind, Text


def fence(info: str, body: str) -> str:
    """Return a fenced code block with the given info string and body."""
    return f"```{info}\n{body}```\n"


class TestRun:
    """Tests for running whole documents."""

    def test_document_without_fences_spawns_nothing(self, tmp_path: Path) -> None:
        """Invariant: no recognized fence means success and no subprocess."""
        document = "# Title\n\nJust prose.\n\n" + fence("python", "raise SystemExit(1)\n")
        with patch("mdtest.services.shell.subprocess.run") as mock_run:
            run(document, cwd=tmp_path)
        mock_run.assert_not_called()

    def test_ignored_shell_block_never_runs(self, tmp_path: Path) -> None:
        """Invariant: `sh, ignore` blocks spawn no subprocess and cannot fail."""
        document = fence("sh, ignore", "touch ran.txt\nexit 1\n")
        with patch("mdtest.services.shell.subprocess.run") as mock_run:
            run(document, cwd=tmp_path)
        mock_run.assert_not_called()
        assert not (tmp_path / "ran.txt").exists()

    def test_exit_zero_succeeds(self, tmp_path: Path) -> None:
        """Invariant: a script exiting 0 is a passing step."""
        run(fence("sh", "exit 0\n"), cwd=tmp_path)

    def test_exit_one_fails_with_body_in_diagnostic(self, tmp_path: Path) -> None:
        """Invariant: a failing script's diagnostic contains its body."""
        with pytest.raises(ShellScriptFailure) as exc_info:
            run(fence("sh", "exit 1\n"), cwd=tmp_path)
        assert "exit 1" in str(exc_info.value)
        assert exc_info.value.returncode == 1

    def test_existing_file_passes(self, write_doc: Callable[..., Path]) -> None:
        """Invariant: file-exist naming the document itself succeeds."""
        doc = write_doc(fence("file-exist", "README.md\n"))
        doc.write_text(doc.read_text() + "\n" + fence("file-exist", f"{doc}\n"))
        run(doc.read_text(), cwd=doc.parent)

    def test_missing_file_fails_naming_the_path(self, tmp_path: Path) -> None:
        """Invariant: a missing path fails with exactly that path in the diagnostic."""
        with pytest.raises(MissingFile) as exc_info:
            run(fence("file-exist", "/does/not/exist\n"), cwd=tmp_path)
        assert exc_info.value.path == "/does/not/exist"
        assert str(exc_info.value) == "file-exist: /does/not/exist does not exist"

    def test_stops_at_first_failing_step(self, write_doc: Callable[..., Path]) -> None:
        """Invariant: steps after a failure never run."""
        doc = write_doc(
            fence("sh", "touch one.txt\n"),
            fence("sh", "touch two.txt\nexit 1\n"),
            fence("sh", "touch three.txt\n"),
        )
        with pytest.raises(ShellScriptFailure):
            run(doc.read_text(), cwd=doc.parent)
        assert (doc.parent / "one.txt").exists()
        assert (doc.parent / "two.txt").exists()
        assert not (doc.parent / "three.txt").exists()

    def test_unknown_modifier_disables_block(self, tmp_path: Path) -> None:
        """Invariant: `sh, bogus` is treated as plain markdown."""
        run(fence("sh, bogus", "touch ran.txt\nexit 1\n"), cwd=tmp_path)
        assert not (tmp_path / "ran.txt").exists()

    def test_steps_see_earlier_steps_side_effects(self, tmp_path: Path) -> None:
        """Invariant: steps share the working directory in document order."""
        document = "\n".join(
            [
                fence("sh", "mkdir -p build\necho ok > build/out.txt\n"),
                fence("file-exist", "build\nbuild/out.txt\n"),
                fence("sh", 'test "$(cat build/out.txt)" = ok\n'),
            ]
        )
        run(document, cwd=tmp_path)

    def test_failure_carries_step(self, tmp_path: Path) -> None:
        """Invariant: the raised failure names the failing step and its line."""
        document = "# Title\n\n" + fence("sh", "true\n") + "\n" + fence("file-exist", "nope\n")
        with pytest.raises(StepFailure) as exc_info:
            run(document, cwd=tmp_path)
        step = exc_info.value.step
        assert step is not None
        assert step.kind is StepKind.FILE_EXIST
        assert step.index == 2
        assert step.line == 7

    def test_runs_are_independent_of_process_cwd(self, tmp_path: Path) -> None:
        """Invariant: each run resolves paths against its own working directory."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (first / "only-here.txt").write_text("x")

        run(fence("file-exist", "only-here.txt\n"), cwd=first)
        with pytest.raises(MissingFile):
            run(fence("file-exist", "only-here.txt\n"), cwd=second)

        run(fence("sh", "pwd > where.txt\n"), cwd=second)
        assert (second / "where.txt").read_text().strip() == str(second)

    def test_default_cwd_is_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Invariant: without cwd, steps run in the current directory."""
        monkeypatch.chdir(tmp_path)
        run(fence("sh", "touch here.txt\n"))
        assert (tmp_path / "here.txt").exists()


def events_for(info: str, body: str) -> list:
    return [FenceStart(info=info, line=1), Text(chunk=body), FenceEnd()]


class TestStateMachine:
    """Tests for TestPlanExecutor event handling."""

    def test_starts_idle(self, tmp_path: Path) -> None:
        """Invariant: a new executor has no open step."""
        executor = TestPlanExecutor(tmp_path)
        assert executor.state is ExecutorState.IDLE
        assert executor.current is None

    def test_valid_fence_start_opens_step(self, tmp_path: Path) -> None:
        """Invariant: a directive fence moves IDLE to ACCUMULATING."""
        executor = TestPlanExecutor(tmp_path)
        executor.feed(FenceStart(info="sh", line=3))
        assert executor.state is ExecutorState.ACCUMULATING
        assert executor.current is not None
        assert executor.current.line == 3
        assert executor.current.index == 1

    def test_invalid_fence_start_stays_idle(self, tmp_path: Path) -> None:
        """Invariant: a non-directive fence leaves the executor IDLE."""
        executor = TestPlanExecutor(tmp_path)
        executor.feed(FenceStart(info="python"))
        assert executor.state is ExecutorState.IDLE
        assert executor.current is None

    def test_text_chunks_accumulate(self, tmp_path: Path) -> None:
        """Invariant: every Text event is appended to the open step."""
        executor = TestPlanExecutor(tmp_path)
        executor.feed(FenceStart(info="sh"))
        executor.feed(Text(chunk="echo one\n"))
        executor.feed(Other(kind="softbreak"))
        executor.feed(Text(chunk="echo two\n"))
        assert executor.current is not None
        assert executor.current.body == "echo one\necho two\n"

    def test_stray_events_are_ignored_while_idle(self, tmp_path: Path) -> None:
        """Invariant: Text and FenceEnd with no open step do nothing."""
        executor = TestPlanExecutor(tmp_path)
        with patch("mdtest.core.executor.run_shell_script") as mock_shell:
            executor.feed(Text(chunk="exit 1\n"))
            executor.feed(FenceEnd())
        mock_shell.assert_not_called()
        assert executor.state is ExecutorState.IDLE

    def test_fence_end_executes_and_returns_to_idle(self, tmp_path: Path) -> None:
        """Invariant: FenceEnd runs the open step exactly once."""
        executor = TestPlanExecutor(tmp_path)
        with patch("mdtest.core.executor.run_shell_script") as mock_shell:
            executor.run_events(events_for("sh", "echo hi\n"))
        mock_shell.assert_called_once_with("echo hi\n", tmp_path, executor.config.shell)
        assert executor.state is ExecutorState.IDLE
        assert executor.steps_run == 1

    def test_unterminated_step_is_dropped(self, tmp_path: Path) -> None:
        """Invariant: a step still open at end of stream never runs."""
        executor = TestPlanExecutor(tmp_path)
        with patch("mdtest.core.executor.run_shell_script") as mock_shell:
            executor.run_events([FenceStart(info="sh"), Text(chunk="touch ran.txt\n")])
        mock_shell.assert_not_called()
        assert executor.state is ExecutorState.IDLE
        assert executor.current is None

    def test_new_fence_start_replaces_open_step(self, tmp_path: Path) -> None:
        """Invariant: only the most recently opened step is kept."""
        executor = TestPlanExecutor(tmp_path)
        executor.feed(FenceStart(info="sh"))
        executor.feed(Text(chunk="exit 1\n"))
        executor.feed(FenceStart(info="file-exist"))
        assert executor.current is not None
        assert executor.current.kind is StepKind.FILE_EXIST
        assert executor.current.body == ""

    def test_failure_halts_executor(self, tmp_path: Path) -> None:
        """Invariant: after a failure, later events are not processed."""
        executor = TestPlanExecutor(tmp_path)
        with pytest.raises(MissingFile):
            executor.run_events(events_for("file-exist", "missing.txt\n"))
        assert executor.state is ExecutorState.FAILED

        with patch("mdtest.core.executor.run_shell_script") as mock_shell:
            for event in events_for("sh", "true\n"):
                executor.feed(event)
        mock_shell.assert_not_called()

    def test_skipped_steps_are_counted(self, tmp_path: Path) -> None:
        """Invariant: skipped steps count as seen but not run."""
        executor = TestPlanExecutor(tmp_path)
        executor.run_events(events_for("sh, ignore", "exit 1\n") + events_for("sh", "true\n"))
        assert executor.steps_seen == 2
        assert executor.steps_skipped == 1
        assert executor.steps_run == 1

    def test_executor_can_run_several_documents(self, tmp_path: Path) -> None:
        """Invariant: an executor returns to IDLE between documents."""
        executor = TestPlanExecutor(tmp_path)
        executor.run(fence("sh", "touch a.txt\n"))
        executor.run(fence("file-exist", "a.txt\n"))
        assert executor.steps_run == 2
