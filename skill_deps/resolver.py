from pathlib import Path
from typing import Callable, Optional

from skill_deps.config import ResolverConfig
from skill_deps.installers import ClawHubInstaller, CommandRunner, GitHubInstaller, Installer
from skill_deps.manifest.models import Dependency, DependencySource, SkillManifest
from skill_deps.manifest.parser import find_manifest, load_manifest
from skill_deps.models import (
    CheckReport,
    Classification,
    ClassificationResult,
    InstallOutcome,
    InstallReport,
    PlannedInstall,
    ResolvedDependency,
)
from skill_deps.state import InstallationState


OutcomeCallback = Callable[[InstallOutcome], None]


class DependencyResolver:
    """Classify a skill's declared dependencies and install the missing ones."""

    def __init__(
        self,
        config: ResolverConfig,
        state: Optional[InstallationState] = None,
        installers: Optional[dict[DependencySource, Installer]] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.config = config
        self.state = state or InstallationState(config.workspace)
        self.installers: dict[DependencySource, Installer] = installers or {
            DependencySource.CLAWHUB: ClawHubInstaller(config, runner=runner),
            DependencySource.GITHUB: GitHubInstaller(config, runner=runner),
        }

    def locate(self, skill_path: Optional[Path] = None) -> Path:
        return find_manifest([skill_path, Path.cwd(), self.config.workspace])

    def load(self, skill_path: Optional[Path] = None) -> SkillManifest:
        return load_manifest(self.locate(skill_path))

    def installer_for(self, dependency: Dependency) -> Installer:
        installer = self.installers.get(dependency.source)
        if installer is None:
            raise KeyError(f"No installer registered for {dependency.source.value}")
        return installer

    def list_dependencies(self, manifest: SkillManifest) -> list[Dependency]:
        return manifest.dependencies

    def classify(self, manifest: SkillManifest) -> ClassificationResult:
        result = ClassificationResult()
        for dependency in manifest.dependencies:
            resolved = ResolvedDependency(
                dependency=dependency,
                classification=self.state.resolve(dependency),
            )
            if resolved.classification == Classification.PRESENT:
                result.present.append(resolved)
            else:
                result.missing.append(resolved)
        result.lock_error = self.state.lock_error
        return result

    def check(
        self,
        manifest: SkillManifest,
        classification: Optional[ClassificationResult] = None,
    ) -> CheckReport:
        return CheckReport(classification=classification or self.classify(manifest))

    def plan(
        self,
        manifest: SkillManifest,
        classification: Optional[ClassificationResult] = None,
    ) -> list[PlannedInstall]:
        classification = classification or self.classify(manifest)
        return [
            PlannedInstall(
                dependency=item.dependency,
                command=self.installer_for(item.dependency).describe(item.dependency),
            )
            for item in classification.missing
        ]

    def install(
        self,
        manifest: SkillManifest,
        classification: Optional[ClassificationResult] = None,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> InstallReport:
        report = InstallReport(classification=classification or self.classify(manifest))

        for item in report.classification.missing:
            outcome = self.installer_for(item.dependency).install(item.dependency)
            report.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
            if not outcome.success and item.required:
                report.aborted_on = item.slug
                break

        return report
