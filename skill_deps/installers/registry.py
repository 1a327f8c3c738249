import shlex
from typing import Optional

from skill_deps.config import ResolverConfig
from skill_deps.errors import InstallError
from skill_deps.installers.base import CommandRunner
from skill_deps.manifest.models import ClawHubDependency
from skill_deps.models import InstallOutcome


class ClawHubInstaller:
    """Install a dependency through the ``clawhub`` registry tool."""

    def __init__(
        self, config: ResolverConfig, runner: Optional[CommandRunner] = None
    ) -> None:
        self.config = config
        self.runner = runner or CommandRunner()

    def command(self, dependency: ClawHubDependency) -> list[str]:
        argv = [self.config.clawhub_executable, "install", dependency.slug]
        if dependency.version:
            argv.extend(["--version", dependency.version])
        if self.config.force:
            argv.append("--force")
        return argv

    def describe(self, dependency: ClawHubDependency) -> str:
        return shlex.join(self.command(dependency))

    def install(self, dependency: ClawHubDependency) -> InstallOutcome:
        try:
            self._run(dependency)
        except InstallError as exc:
            return InstallOutcome(dependency=dependency, success=False, reason=str(exc))
        return InstallOutcome(dependency=dependency, success=True)

    def _run(self, dependency: ClawHubDependency) -> None:
        result = self.runner.run(
            self.command(dependency),
            timeout=self.config.registry_timeout,
            cwd=self.config.workspace if self.config.workspace.is_dir() else None,
        )
        if not result.ok:
            raise InstallError(
                slug=dependency.slug,
                reason=f"Failed to install {dependency.slug}: {result.detail}",
            )
