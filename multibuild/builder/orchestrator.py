"""Sequential orchestration of project detection and builds."""

from enum import IntEnum
from pathlib import Path

from multibuild.builder.detector import ProjectDetector
from multibuild.builder.executor import BuildExecutor, BuildResult, LoggerSink, OutputSink
from multibuild.builder.report import ReportModel
from multibuild.builder.resolver import CommandResolver, Platform
from multibuild.core.exceptions.errors import DirectoryNotFoundError
from multibuild.core.logger.logger import get_logger

logger = get_logger(__name__)


class ExitStatus(IntEnum):
    """Process exit status of a run."""

    SUCCESS = 0
    BUILD_FAILED = 1
    USAGE_ERROR = 2
    NO_PROJECTS = 3
    INTERRUPTED = 130


class BuildOrchestrator:
    """Detects projects and builds them one at a time.

    A failed build does not stop the batch. An interrupted build does:
    its result is recorded and the remaining projects are skipped.
    """

    def __init__(
        self,
        detector: ProjectDetector | None = None,
        resolver: CommandResolver | None = None,
        executor: BuildExecutor | None = None,
        platform: Platform | None = None,
        sink: OutputSink | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            detector: Project detector.
            resolver: Command resolver.
            executor: Build executor.
            platform: Platform to resolve commands for (defaults to the host).
            sink: Destination for build tool output (defaults to logging).
        """
        self.detector = detector or ProjectDetector()
        self.resolver = resolver or CommandResolver()
        self.executor = executor or BuildExecutor()
        self.platform = platform or Platform.current()
        self.sink = sink or LoggerSink()

    def run(self, root: Path) -> tuple[ReportModel, ExitStatus]:
        """Build every project under ``root``.

        Args:
            root: Directory containing the projects.

        Returns:
            The report and the exit status of the run.

        Raises:
            DirectoryNotFoundError: If ``root`` is missing or not a directory.
        """
        root = Path(root)
        if not root.is_dir():
            raise DirectoryNotFoundError(
                "Root path does not exist or is not a directory",
                path=str(root.absolute()),
            )

        projects = self.detector.detect(root)
        if not projects:
            logger.warning(f"No Maven or Gradle projects found in: {root.absolute()}")
            return ReportModel(), ExitStatus.NO_PROJECTS

        logger.info(f"Found {len(projects)} project(s) to build")

        results: list[BuildResult] = []
        for index, project in enumerate(projects):
            command = self.resolver.resolve(project, self.platform)
            result = self.executor.execute(project, command, self.sink)
            results.append(result)

            if result.interrupted:
                skipped = len(projects) - index - 1
                if skipped:
                    logger.warning(f"Build run interrupted, skipping {skipped} remaining project(s)")
                break

        report = ReportModel.from_results(results)
        return report, self.exit_status(report)

    @staticmethod
    def exit_status(report: ReportModel) -> ExitStatus:
        """Compute the exit status for a report.

        Args:
            report: Report of a run.

        Returns:
            Exit status distinguishing empty, successful, failed and
            interrupted runs.
        """
        if report.is_empty:
            return ExitStatus.NO_PROJECTS
        if report.interrupted:
            return ExitStatus.INTERRUPTED
        if report.all_succeeded:
            return ExitStatus.SUCCESS
        return ExitStatus.BUILD_FAILED


def run_builds(root: Path, platform: Platform | None = None) -> tuple[ReportModel, ExitStatus]:
    """Convenience function to detect and build all projects.

    Args:
        root: Directory containing the projects.
        platform: Platform to resolve commands for (defaults to the host).

    Returns:
        The report and the exit status of the run.
    """
    return BuildOrchestrator(platform=platform).run(root)
