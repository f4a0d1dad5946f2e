"""Build orchestration for Maven and Gradle projects.

This module provides:
- Project detection (Maven, Gradle)
- Build command resolution (wrapper script or global tool)
- Build execution with output capture and timing
- Result aggregation into a report
"""

from multibuild.builder.detector import (
    ProjectDescriptor,
    ProjectDetector,
    ProjectKind,
    detect_projects,
)
from multibuild.builder.executor import (
    BuildExecutor,
    BuildProcess,
    BuildResult,
    LoggerSink,
    OutputSink,
    ProcessLauncher,
    SubprocessLauncher,
)
from multibuild.builder.orchestrator import (
    BuildOrchestrator,
    ExitStatus,
    run_builds,
)
from multibuild.builder.report import ReportModel
from multibuild.builder.resolver import (
    CommandResolver,
    Platform,
    ResolvedCommand,
    resolve_command,
)

__all__ = [
    "ProjectKind",
    "ProjectDescriptor",
    "ProjectDetector",
    "detect_projects",
    "Platform",
    "ResolvedCommand",
    "CommandResolver",
    "resolve_command",
    "BuildResult",
    "OutputSink",
    "LoggerSink",
    "BuildProcess",
    "ProcessLauncher",
    "SubprocessLauncher",
    "BuildExecutor",
    "ReportModel",
    "ExitStatus",
    "BuildOrchestrator",
    "run_builds",
]
