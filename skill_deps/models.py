from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from skill_deps.manifest.models import Dependency, DependencySource


class Classification(str, Enum):
    PRESENT = "present"
    MISSING = "missing"


class RunMode(str, Enum):
    LIST = "list"
    CHECK = "check"
    DRY_RUN = "dry-run"
    INSTALL = "install"


@dataclass(frozen=True)
class ResolvedDependency:
    dependency: Dependency
    classification: Classification

    @property
    def source(self) -> DependencySource:
        return self.dependency.source

    @property
    def slug(self) -> str:
        return self.dependency.local_slug

    @property
    def required(self) -> bool:
        return self.dependency.required


@dataclass
class ClassificationResult:
    present: list[ResolvedDependency] = field(default_factory=list)
    missing: list[ResolvedDependency] = field(default_factory=list)
    lock_error: Optional[str] = None

    @property
    def satisfied(self) -> bool:
        return not self.missing

    @property
    def required_missing(self) -> list[ResolvedDependency]:
        return [item for item in self.missing if item.required]


@dataclass(frozen=True)
class InstallOutcome:
    dependency: Dependency
    success: bool
    reason: Optional[str] = None
    skipped: bool = False

    @property
    def slug(self) -> str:
        return self.dependency.local_slug


@dataclass(frozen=True)
class PlannedInstall:
    dependency: Dependency
    command: str


@dataclass
class CheckReport:
    classification: ClassificationResult

    @property
    def unmet_required(self) -> int:
        return len(self.classification.required_missing)

    @property
    def satisfied(self) -> bool:
        return self.unmet_required == 0


@dataclass
class InstallReport:
    classification: ClassificationResult
    outcomes: list[InstallOutcome] = field(default_factory=list)
    aborted_on: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.aborted_on is not None

    @property
    def installed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def already_present(self) -> int:
        return len(self.classification.present)

    @property
    def failures(self) -> list[str]:
        return [
            outcome.reason or f"Failed to install {outcome.slug}"
            for outcome in self.outcomes
            if not outcome.success
        ]

    @property
    def ok(self) -> bool:
        return not self.aborted
