"""Build executor for running resolved build commands.

This module runs one build tool invocation per project, forwards its
combined output to a sink and turns the outcome into a BuildResult.
"""

import logging
import subprocess
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from multibuild.builder.detector import ProjectDescriptor
from multibuild.builder.resolver import ResolvedCommand
from multibuild.core.logger.logger import get_logger

logger = get_logger(__name__)

INTERRUPTED_DETAIL = "interrupted by operator"


@dataclass(frozen=True)
class BuildResult:
    """Result of one build attempt.

    Attributes:
        project_name: Name of the project.
        project_path: Absolute path of the project directory.
        success: Whether the build tool exited with code 0.
        build_type: Project kind label (MAVEN or GRADLE).
        duration_ms: Wall-clock time of the attempt in milliseconds.
        error_message: Failure description; set if and only if the build failed.
        interrupted: Whether the operator cancelled the build.
    """

    project_name: str
    project_path: str
    success: bool
    build_type: str
    duration_ms: int
    error_message: str | None = None
    interrupted: bool = False

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError("duration_ms must not be negative")
        if self.success and self.error_message is not None:
            raise ValueError("a successful build cannot carry an error message")
        if not self.success and not self.error_message:
            raise ValueError("a failed build requires an error message")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "project_name": self.project_name,
            "project_path": self.project_path,
            "success": self.success,
            "build_type": self.build_type,
            "duration_ms": self.duration_ms,
            "error_message": self.error_message,
            "interrupted": self.interrupted,
        }


class OutputSink(Protocol):
    """Receives build tool output one line at a time."""

    def write(self, source: str, line: str) -> None:
        """Accept a line of output produced by ``source``."""
        ...


class LoggerSink:
    """Output sink that forwards lines to a logger."""

    def __init__(self, target: logging.Logger | None = None, level: int = logging.DEBUG):
        self.logger = target or logger
        self.level = level

    def write(self, source: str, line: str) -> None:
        self.logger.log(self.level, f"[{source}] {line}")


class BuildProcess(Protocol):
    """A running build tool process."""

    stdout: Iterable[str]

    def wait(self) -> int:
        """Block until the process exits and return its exit code."""
        ...

    def kill(self) -> None:
        """Terminate the process."""
        ...


class ProcessLauncher(Protocol):
    """Starts build tool processes."""

    def spawn(self, command: ResolvedCommand) -> BuildProcess:
        """Start ``command`` with stderr merged into stdout."""
        ...


class SubprocessBuildProcess:
    """BuildProcess backed by :class:`subprocess.Popen`."""

    def __init__(self, popen: subprocess.Popen):
        self._popen = popen
        self.stdout = popen.stdout if popen.stdout is not None else ()

    def wait(self) -> int:
        try:
            return self._popen.wait()
        finally:
            self._close_stdout()

    def kill(self) -> None:
        self._popen.kill()
        self._popen.wait()
        self._close_stdout()

    def _close_stdout(self) -> None:
        if self._popen.stdout is not None and not self._popen.stdout.closed:
            self._popen.stdout.close()


class SubprocessLauncher:
    """Launches build tools as real child processes."""

    def spawn(self, command: ResolvedCommand) -> SubprocessBuildProcess:
        popen = subprocess.Popen(
            command.argv,
            cwd=command.working_directory,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        return SubprocessBuildProcess(popen)


class BuildExecutor:
    """Executes the build command of one project.

    Every failure mode (non-zero exit, spawn failure, broken output stream,
    operator interruption) is captured into the returned BuildResult.
    """

    def __init__(self, launcher: ProcessLauncher | None = None):
        """Initialize the build executor.

        Args:
            launcher: Process launcher. Defaults to real subprocesses.
        """
        self.launcher = launcher or SubprocessLauncher()

    def execute(
        self,
        descriptor: ProjectDescriptor,
        command: ResolvedCommand,
        sink: OutputSink,
    ) -> BuildResult:
        """Run the build and wait for it to finish.

        Output is drained to end-of-stream before waiting, so a chatty build
        cannot fill the pipe and block.

        Args:
            descriptor: The project being built.
            command: Resolved command for the project.
            sink: Destination for the build tool's output lines.

        Returns:
            BuildResult describing the outcome.
        """
        name = descriptor.name
        logger.info(f"Starting build for project: {name} ({descriptor.kind.value})")
        logger.debug(f"Running '{command.display}' in {command.working_directory}")

        start_time = time.monotonic()
        process: BuildProcess | None = None

        try:
            process = self.launcher.spawn(command)
            for line in process.stdout:
                sink.write(name, line.rstrip("\r\n"))
            exit_code = process.wait()

        except KeyboardInterrupt as e:
            self._kill(process)
            result = self._result(
                descriptor,
                start_time,
                error_message=f"Build interrupted: {str(e) or INTERRUPTED_DETAIL}",
                interrupted=True,
            )
            logger.error(f"Build INTERRUPTED for project: {name} - {result.error_message}")
            return result

        except Exception as e:
            self._kill(process)
            result = self._result(
                descriptor,
                start_time,
                error_message=str(e) or type(e).__name__,
            )
            logger.error(f"Build FAILED for project: {name} - Exception: {result.error_message}")
            logger.debug(f"Failure details for {name}", exc_info=True)
            return result

        if exit_code == 0:
            result = self._result(descriptor, start_time)
            logger.info(f"Build SUCCESS for project: {name} ({result.duration_ms}ms)")
        else:
            result = self._result(
                descriptor,
                start_time,
                error_message=f"Build failed with exit code: {exit_code}",
            )
            logger.error(f"Build FAILED for project: {name} - {result.error_message}")

        return result

    @staticmethod
    def _result(
        descriptor: ProjectDescriptor,
        start_time: float,
        error_message: str | None = None,
        interrupted: bool = False,
    ) -> BuildResult:
        duration_ms = max(0, int((time.monotonic() - start_time) * 1000))
        return BuildResult(
            project_name=descriptor.name,
            project_path=str(descriptor.directory),
            success=error_message is None,
            build_type=descriptor.kind.value,
            duration_ms=duration_ms,
            error_message=error_message,
            interrupted=interrupted,
        )

    @staticmethod
    def _kill(process: BuildProcess | None) -> None:
        if process is None:
            return
        try:
            process.kill()
        except Exception as e:
            logger.debug(f"Could not kill build process: {e}")
