"""Build command resolution.

Decides which executable and arguments build a project: the project's own
wrapper script when it ships one, otherwise the globally installed tool.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from multibuild.builder.detector import ProjectDescriptor, ProjectKind
from multibuild.core.exceptions.errors import UnsupportedProjectKindError


class Platform(Enum):
    """Operating system family that decides how commands are invoked."""

    WINDOWS = "windows"
    POSIX = "posix"

    @classmethod
    def current(cls) -> "Platform":
        """Return the platform of the running interpreter."""
        return cls.WINDOWS if os.name == "nt" else cls.POSIX


WINDOWS_SHELL = "cmd.exe"
WINDOWS_SHELL_RUN_FLAG = "/c"

# kind -> (POSIX wrapper, Windows wrapper)
WRAPPER_SCRIPTS = {
    ProjectKind.MAVEN: ("mvnw", "mvnw.cmd"),
    ProjectKind.GRADLE: ("gradlew", "gradlew.bat"),
}

FALLBACK_COMMANDS = {
    ProjectKind.MAVEN: "mvn",
    ProjectKind.GRADLE: "gradle",
}

BUILD_GOALS = {
    ProjectKind.MAVEN: ("clean", "install"),
    ProjectKind.GRADLE: ("clean", "build"),
}


@dataclass(frozen=True)
class ResolvedCommand:
    """Concrete invocation for one project.

    Attributes:
        executable: Program to run (tool name, wrapper path or shell).
        arguments: Arguments passed to the executable.
        working_directory: Directory the command runs in.
    """

    executable: str
    arguments: tuple[str, ...]
    working_directory: Path

    @property
    def argv(self) -> list[str]:
        """Full argument vector, executable first."""
        return [self.executable, *self.arguments]

    @property
    def display(self) -> str:
        """Command line for log messages."""
        return " ".join(self.argv)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "executable": self.executable,
            "arguments": list(self.arguments),
            "working_directory": str(self.working_directory),
        }


class CommandResolver:
    """Resolves the build command for a detected project.

    Resolution is a pure function of the descriptor and the platform,
    plus one check for the wrapper script on disk.
    """

    def resolve(self, descriptor: ProjectDescriptor, platform: Platform) -> ResolvedCommand:
        """Resolve the command that builds a project.

        Args:
            descriptor: The project to build.
            platform: Platform family to build the command for.

        Returns:
            The resolved command, rooted at the project directory.

        Raises:
            UnsupportedProjectKindError: If the descriptor's kind has no
                known build tool.
        """
        kind = descriptor.kind
        if kind not in BUILD_GOALS:
            raise UnsupportedProjectKindError(kind)

        tool = self.resolve_tool(descriptor, platform)
        goals = BUILD_GOALS[kind]

        if platform is Platform.WINDOWS:
            # Wrappers are batch files there and need the interpreter
            return ResolvedCommand(
                executable=WINDOWS_SHELL,
                arguments=(WINDOWS_SHELL_RUN_FLAG, tool, *goals),
                working_directory=descriptor.directory,
            )

        return ResolvedCommand(
            executable=tool,
            arguments=goals,
            working_directory=descriptor.directory,
        )

    def resolve_tool(self, descriptor: ProjectDescriptor, platform: Platform) -> str:
        """Pick the wrapper script or the global tool for a project.

        Args:
            descriptor: The project to build.
            platform: Platform family.

        Returns:
            ``mvnw.cmd``/``gradlew.bat`` on Windows or ``./mvnw``/``./gradlew``
            elsewhere when the wrapper exists, else ``mvn``/``gradle``.
        """
        kind = descriptor.kind
        if kind not in WRAPPER_SCRIPTS:
            raise UnsupportedProjectKindError(kind)

        posix_wrapper, windows_wrapper = WRAPPER_SCRIPTS[kind]
        wrapper = windows_wrapper if platform is Platform.WINDOWS else posix_wrapper

        if not (descriptor.directory / wrapper).exists():
            return FALLBACK_COMMANDS[kind]
        if platform is Platform.WINDOWS:
            return wrapper
        return f"./{wrapper}"


def resolve_command(
    descriptor: ProjectDescriptor,
    platform: Platform | None = None,
) -> ResolvedCommand:
    """Convenience function to resolve a build command.

    Args:
        descriptor: The project to build.
        platform: Platform family (defaults to the running platform).

    Returns:
        ResolvedCommand for the project.
    """
    return CommandResolver().resolve(descriptor, platform or Platform.current())
