"""Aggregate report of a multi-project build run."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from multibuild.builder.executor import BuildResult


@dataclass(frozen=True)
class ReportModel:
    """Immutable view over all build results of one run.

    Results keep the order in which projects were detected and built.
    Counts are derived on demand from ``results``.
    """

    results: tuple[BuildResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[BuildResult]) -> "ReportModel":
        return cls(results=tuple(results))

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> tuple[BuildResult, ...]:
        return tuple(r for r in self.results if r.success)

    @property
    def failed(self) -> tuple[BuildResult, ...]:
        return tuple(r for r in self.results if not r.success)

    @property
    def success_count(self) -> int:
        return len(self.successful)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def all_succeeded(self) -> bool:
        """True when at least one project was built and none failed."""
        return bool(self.results) and self.failure_count == 0

    @property
    def interrupted(self) -> bool:
        return any(r.interrupted for r in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and export."""
        return {
            "total": self.total,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "interrupted": self.interrupted,
            "results": [r.to_dict() for r in self.results],
        }
