"""Project detection for Maven and Gradle builds.

This module scans the immediate subdirectories of a root directory and
classifies each one by the build marker files it contains.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from multibuild.core.logger.logger import get_logger

logger = get_logger(__name__)


class ProjectKind(Enum):
    """Supported build systems.

    Directories that match neither kind are not represented at all.
    """

    MAVEN = "MAVEN"
    GRADLE = "GRADLE"


MAVEN_MARKERS = ("pom.xml",)
GRADLE_MARKERS = ("build.gradle", "build.gradle.kts")


@dataclass(frozen=True)
class ProjectDescriptor:
    """A buildable project found under the root directory.

    Attributes:
        directory: Absolute path to the project directory.
        kind: The detected build system.
    """

    directory: Path
    kind: ProjectKind

    @property
    def name(self) -> str:
        """Project name, taken from the directory name."""
        return self.directory.name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "name": self.name,
            "directory": str(self.directory),
            "kind": self.kind.value,
        }


class ProjectDetector:
    """Detects Maven and Gradle projects one level below a root directory.

    Maven is checked before Gradle, so a directory holding both a pom.xml
    and a build.gradle is treated as a Maven project.
    """

    def __init__(self, sort_entries: bool = True):
        """Initialize the project detector.

        Args:
            sort_entries: Sort subdirectories by name. When False the
                filesystem listing order is kept, which is platform-dependent.
        """
        self.sort_entries = sort_entries

    def detect(self, root: Path) -> list[ProjectDescriptor]:
        """Detect the projects under a root directory.

        Args:
            root: Directory whose immediate subdirectories are inspected.

        Returns:
            Descriptors in listing order. Empty when the root is missing,
            unreadable or holds nothing buildable.
        """
        root = Path(root)
        if not root.is_dir():
            logger.warning(
                f"Directory not found: root does not exist or is not a directory: {root.absolute()}"
            )
            return []

        try:
            subdirs = [entry for entry in root.iterdir() if entry.is_dir()]
        except OSError as e:
            logger.warning(f"Cannot list subdirectories of {root.absolute()}: {e}")
            return []

        if self.sort_entries:
            subdirs.sort(key=lambda p: p.name)

        projects = []
        for subdir in subdirs:
            kind = self.classify(subdir)
            if kind is None:
                logger.debug(f"Skipping {subdir.name}: no Maven or Gradle build file")
                continue
            projects.append(ProjectDescriptor(directory=subdir.absolute(), kind=kind))
            logger.info(f"Detected {kind.value} project: {subdir.name}")

        return projects

    def classify(self, directory: Path) -> ProjectKind | None:
        """Classify a single directory.

        Args:
            directory: Candidate project directory.

        Returns:
            The project kind, or None if no marker file is present.
        """
        if self._has_any(directory, MAVEN_MARKERS):
            return ProjectKind.MAVEN
        if self._has_any(directory, GRADLE_MARKERS):
            return ProjectKind.GRADLE
        return None

    @staticmethod
    def _has_any(directory: Path, markers: tuple[str, ...]) -> bool:
        return any((directory / marker).exists() for marker in markers)


def detect_projects(root: Path, sort_entries: bool = True) -> list[ProjectDescriptor]:
    """Convenience function to detect projects.

    Args:
        root: Root directory to scan.
        sort_entries: Sort subdirectories by name.

    Returns:
        List of detected project descriptors.
    """
    detector = ProjectDetector(sort_entries=sort_entries)
    return detector.detect(root)
