from pathlib import Path
from typing import Iterable


class SkillDepsError(Exception):
    """Base user-facing application error."""


class SkillDepsFileError(SkillDepsError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ManifestNotFoundError(SkillDepsError):
    def __init__(self, searched: Iterable[Path]) -> None:
        self.searched = list(searched)
        locations = ", ".join(str(path) for path in self.searched) or "none"
        super().__init__(
            f"No SKILL.md found (searched: {locations}). "
            "Use --skill-path to specify location."
        )


class InstallError(SkillDepsError):
    def __init__(self, slug: str, reason: str) -> None:
        self.slug = slug
        self.reason = reason
        super().__init__(reason)


class RepositoryPathNotFoundError(InstallError):
    def __init__(self, slug: str, repo: str, path: str) -> None:
        self.repo = repo
        self.path = path
        super().__init__(slug=slug, reason=f"Path {path} not found in {repo}")
