"""Tests for the build executor."""

import logging
import os
import sys
from pathlib import Path

import pytest

from multibuild.builder.detector import ProjectDescriptor, ProjectKind
from multibuild.builder.executor import (
    BuildExecutor,
    BuildResult,
    LoggerSink,
    SubprocessLauncher,
)
from multibuild.builder.resolver import CommandResolver, Platform, ResolvedCommand
from tests.fakes import FakeLauncher, FakeProcess, RecordingSink


@pytest.fixture
def project(temp_dir: Path) -> ProjectDescriptor:
    """A Maven project descriptor."""
    directory = temp_dir / "orders"
    directory.mkdir()
    (directory / "pom.xml").write_text("")
    return ProjectDescriptor(directory=directory, kind=ProjectKind.MAVEN)


@pytest.fixture
def command(project: ProjectDescriptor) -> ResolvedCommand:
    """Resolved command for the project."""
    return ResolvedCommand("mvn", ("clean", "install"), project.directory)


class TestBuildResult:
    """Tests for BuildResult."""

    def test_success_result(self):
        """Test creating a successful result."""
        result = BuildResult("a", "/a", True, "MAVEN", 10)
        assert result.success is True
        assert result.error_message is None
        assert result.interrupted is False

    def test_failure_requires_message(self):
        """Test a failed result without a message is rejected."""
        with pytest.raises(ValueError):
            BuildResult("a", "/a", False, "MAVEN", 10)
        with pytest.raises(ValueError):
            BuildResult("a", "/a", False, "MAVEN", 10, error_message="")

    def test_success_rejects_message(self):
        """Test a successful result cannot carry an error."""
        with pytest.raises(ValueError):
            BuildResult("a", "/a", True, "MAVEN", 10, error_message="boom")

    def test_negative_duration_rejected(self):
        """Test negative durations are rejected."""
        with pytest.raises(ValueError):
            BuildResult("a", "/a", True, "MAVEN", -1)

    def test_immutable(self):
        """Test results cannot be modified."""
        result = BuildResult("a", "/a", True, "GRADLE", 5)
        with pytest.raises(AttributeError):
            result.success = False  # type: ignore[misc]

    def test_to_dict(self):
        """Test dictionary conversion."""
        result = BuildResult("a", "/a", False, "GRADLE", 5, error_message="x")
        data = result.to_dict()
        assert data["project_name"] == "a"
        assert data["success"] is False
        assert data["error_message"] == "x"
        assert data["duration_ms"] == 5


class TestLoggerSink:
    """Tests for LoggerSink."""

    def test_writes_tagged_lines(self, caplog):
        """Test lines are logged with the project name."""
        target = logging.getLogger("test.sink")
        sink = LoggerSink(target, level=logging.INFO)

        with caplog.at_level(logging.INFO, logger="test.sink"):
            sink.write("orders", "[INFO] BUILD SUCCESS")

        assert "[orders] [INFO] BUILD SUCCESS" in caplog.text


class TestBuildExecutor:
    """Tests for BuildExecutor against a fake launcher."""

    def test_default_launcher(self):
        """Test real subprocesses are used by default."""
        assert isinstance(BuildExecutor().launcher, SubprocessLauncher)

    def test_successful_build(self, project, command, sink):
        """Test exit code 0 yields a successful result."""
        launcher = FakeLauncher(default=FakeProcess(lines=["compiling\n", "done\n"]))

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.success is True
        assert result.error_message is None
        assert result.project_name == "orders"
        assert result.project_path == str(project.directory)
        assert result.build_type == "MAVEN"
        assert result.duration_ms >= 0
        assert launcher.spawned == [command]

    def test_output_forwarded_line_by_line(self, project, command, sink):
        """Test each line reaches the sink tagged and without newline."""
        process = FakeProcess(lines=["line one\n", "line two\r\n", "last"])
        launcher = FakeLauncher(processes={"orders": process})

        BuildExecutor(launcher).execute(project, command, sink)

        assert sink.lines == [
            ("orders", "line one"),
            ("orders", "line two"),
            ("orders", "last"),
        ]
        assert process.waited is True

    def test_non_zero_exit(self, project, command, sink):
        """Test a non-zero exit code is reported verbatim."""
        launcher = FakeLauncher(processes={"orders": FakeProcess(exit_code=1)})

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.success is False
        assert result.error_message == "Build failed with exit code: 1"
        assert result.interrupted is False

    def test_spawn_failure(self, project, command, sink):
        """Test a missing executable is captured, not raised."""
        launcher = FakeLauncher(
            spawn_error=FileNotFoundError(2, "No such file or directory", "mvn")
        )

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.success is False
        assert "No such file or directory" in result.error_message
        assert result.duration_ms >= 0
        assert sink.lines == []

    def test_stream_failure_kills_process(self, project, command, sink):
        """Test an I/O error while reading output is captured."""
        process = FakeProcess(lines=["partial\n"], stream_error=OSError("pipe broken"))
        launcher = FakeLauncher(processes={"orders": process})

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.success is False
        assert result.error_message == "pipe broken"
        assert process.killed is True
        assert sink.lines == [("orders", "partial")]

    def test_exception_without_message_uses_type_name(self, project, command, sink):
        """Test an empty exception message is replaced by the class name."""
        launcher = FakeLauncher(spawn_error=RuntimeError())

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.error_message == "RuntimeError"

    def test_interrupted_wait(self, project, command, sink):
        """Test an interruption is recorded and flagged, not raised."""
        process = FakeProcess(wait_error=KeyboardInterrupt())
        launcher = FakeLauncher(processes={"orders": process})

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.success is False
        assert result.interrupted is True
        assert result.error_message == "Build interrupted: interrupted by operator"
        assert process.killed is True

    def test_interrupted_while_streaming(self, project, command, sink):
        """Test an interruption during output streaming is captured."""
        process = FakeProcess(lines=["a\n"], stream_error=KeyboardInterrupt("SIGINT"))
        launcher = FakeLauncher(processes={"orders": process})

        result = BuildExecutor(launcher).execute(project, command, sink)

        assert result.interrupted is True
        assert result.error_message == "Build interrupted: SIGINT"

    def test_logs_outcome(self, project, command, sink, caplog):
        """Test start and failure are logged."""
        launcher = FakeLauncher(processes={"orders": FakeProcess(exit_code=3)})

        with caplog.at_level(logging.INFO):
            BuildExecutor(launcher).execute(project, command, sink)

        assert "Starting build for project: orders (MAVEN)" in caplog.text
        assert "Build FAILED for project: orders" in caplog.text


@pytest.mark.skipif(os.name == "nt", reason="POSIX wrapper scripts only")
class TestSubprocessLauncher:
    """Integration tests running real wrapper scripts."""

    def _write_wrapper(self, directory: Path, body: str) -> None:
        script = directory / "mvnw"
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)

    def test_wrapper_runs_in_project_directory(self, project, sink):
        """Test the wrapper runs with the project as working directory."""
        self._write_wrapper(project.directory, 'echo "args: $*"\npwd\necho "oops" >&2\nexit 0')
        command = CommandResolver().resolve(project, Platform.POSIX)

        result = BuildExecutor().execute(project, command, sink)

        assert result.success is True
        lines = [line for _, line in sink.lines]
        assert "args: clean install" in lines
        assert Path(lines[1]).resolve() == project.directory.resolve()
        assert "oops" in lines

    def test_wrapper_exit_code(self, project, sink):
        """Test the exit code of a real process is reported."""
        self._write_wrapper(project.directory, "exit 7")
        command = CommandResolver().resolve(project, Platform.POSIX)

        result = BuildExecutor().execute(project, command, sink)

        assert result.error_message == "Build failed with exit code: 7"

    def test_large_output_does_not_deadlock(self, project, sink):
        """Test output larger than a pipe buffer is drained."""
        self._write_wrapper(
            project.directory,
            'i=0\nwhile [ $i -lt 5000 ]; do echo "line $i padding padding padding"; i=$((i+1)); done',
        )
        command = CommandResolver().resolve(project, Platform.POSIX)

        result = BuildExecutor().execute(project, command, sink)

        assert result.success is True
        assert len(sink.lines) == 5000

    def test_missing_executable(self, project, sink):
        """Test a missing tool becomes a failed result."""
        command = ResolvedCommand(
            "multibuild-no-such-tool", ("clean",), project.directory
        )

        result = BuildExecutor().execute(project, command, sink)

        assert result.success is False
        assert result.error_message

    def test_uses_python_as_tool(self, project, sink):
        """Test an arbitrary executable path is accepted."""
        command = ResolvedCommand(sys.executable, ("-c", "print('hi')"), project.directory)

        result = BuildExecutor().execute(project, command, sink)

        assert result.success is True
        assert sink.lines == [("orders", "hi")]
