import shutil
from pathlib import Path
from typing import Optional

from skill_deps.config import ResolverConfig
from skill_deps.constants import SCRATCH_PREFIX
from skill_deps.errors import InstallError, RepositoryPathNotFoundError
from skill_deps.installers.base import CommandRunner
from skill_deps.manifest.models import GitHubDependency
from skill_deps.models import InstallOutcome
from skill_deps.utils import is_plain_segment, is_under


class GitHubInstaller:
    """Install one subdirectory of a GitHub repository via sparse checkout."""

    def __init__(
        self, config: ResolverConfig, runner: Optional[CommandRunner] = None
    ) -> None:
        self.config = config
        self.runner = runner or CommandRunner()

    def target_dir(self, dependency: GitHubDependency) -> Path:
        return self.config.skills_dir / dependency.local_slug

    def scratch_dir(self, dependency: GitHubDependency) -> Path:
        return self.config.workspace / f"{SCRATCH_PREFIX}{dependency.local_slug}"

    def clone_url(self, dependency: GitHubDependency) -> str:
        base = self.config.github_base_url.rstrip("/")
        return f"{base}/{dependency.repo}.git"

    def describe(self, dependency: GitHubDependency) -> str:
        return (
            f"git sparse-checkout {dependency.repo}:{dependency.path}"
            f" -> skills/{dependency.local_slug}"
        )

    def install(self, dependency: GitHubDependency) -> InstallOutcome:
        target = self.target_dir(dependency)
        try:
            self._check_target(dependency, target)
        except InstallError as exc:
            return InstallOutcome(dependency=dependency, success=False, reason=str(exc))

        if target.exists() and not self.config.force:
            return InstallOutcome(
                dependency=dependency,
                success=True,
                reason=f"already exists at skills/{dependency.local_slug}",
                skipped=True,
            )

        try:
            self._install(dependency, target)
        except InstallError as exc:
            return InstallOutcome(dependency=dependency, success=False, reason=str(exc))
        except OSError as exc:
            reason = f"Failed to install {dependency.local_slug} from GitHub: {exc}"
            return InstallOutcome(dependency=dependency, success=False, reason=reason)
        return InstallOutcome(dependency=dependency, success=True)

    def _install(self, dependency: GitHubDependency, target: Path) -> None:
        slug = dependency.local_slug
        scratch = self.scratch_dir(dependency)
        try:
            _remove_tree(scratch)
            self._git(
                dependency,
                [
                    "clone",
                    "--depth",
                    "1",
                    "--filter=blob:none",
                    "--sparse",
                    self.clone_url(dependency),
                    str(scratch),
                ],
                timeout=self.config.clone_timeout,
            )
            self._git(
                dependency,
                ["-C", str(scratch), "sparse-checkout", "set", dependency.path],
                timeout=self.config.checkout_timeout,
            )

            source = scratch / dependency.path
            if not is_under(source, scratch) or not source.is_dir():
                raise RepositoryPathNotFoundError(slug, dependency.repo, dependency.path)

            _remove_tree(target)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(source, target, ignore=shutil.ignore_patterns(".git"))
        finally:
            _remove_tree(scratch)

    def _check_target(self, dependency: GitHubDependency, target: Path) -> None:
        # Only a direct child of skills/ may be skipped or replaced.
        skills_dir = self.config.skills_dir
        if (
            not is_plain_segment(dependency.local_slug)
            or not is_under(target, skills_dir)
            or target.resolve() == skills_dir.resolve()
        ):
            raise RepositoryPathNotFoundError(
                dependency.local_slug, dependency.repo, dependency.path
            )

    def _git(self, dependency: GitHubDependency, args: list[str], timeout: int) -> None:
        result = self.runner.run([self.config.git_executable, *args], timeout=timeout)
        if not result.ok:
            slug = dependency.local_slug
            raise InstallError(
                slug=slug,
                reason=f"Failed to install {slug} from GitHub: {result.detail}",
            )


def _remove_tree(path: Path) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)
