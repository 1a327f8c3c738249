from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from skill_deps.constants import (
    LOCK_DIRNAME,
    LOCK_FILENAME,
    SKILL_FILENAME,
    SKILLS_DIRNAME,
)
from skill_deps.manifest.models import (
    ClawHubDependency,
    Dependency,
    DependencySource,
    GitHubDependency,
)
from skill_deps.models import Classification
from skill_deps.utils import is_plain_segment, read_json_safe


LOCK_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "skills": {"type": "object"},
    },
}


class InstallationState:
    """Read-only view over a workspace's lock file and skills directory."""

    def __init__(self, workspace: Path) -> None:
        self.workspace = workspace
        self.lock_error: Optional[str] = None
        self._lock: Optional[dict[str, Any]] = None

    @property
    def skills_dir(self) -> Path:
        return self.workspace / SKILLS_DIRNAME

    @property
    def lock_path(self) -> Path:
        return self.workspace / LOCK_DIRNAME / LOCK_FILENAME

    def load_lock(self) -> dict[str, Any]:
        if self._lock is None:
            self._lock = self._read_lock()
        return self._lock

    def _read_lock(self) -> dict[str, Any]:
        payload, error = read_json_safe(self.lock_path)
        if error is not None:
            self.lock_error = error
            return {}
        if payload is None:
            return {}

        errors = sorted(
            Draft202012Validator(LOCK_SCHEMA).iter_errors(payload),
            key=lambda item: list(item.path),
        )
        if errors:
            self.lock_error = errors[0].message
            return {}
        return dict(payload.get("skills", {}))

    def is_installed(self, identifier: str) -> bool:
        if not is_plain_segment(identifier):
            return False
        return (self.skills_dir / identifier / SKILL_FILENAME).is_file()

    def resolve_clawhub(self, dependency: ClawHubDependency) -> Classification:
        lock = self.load_lock()
        for identifier in dependency.identifiers:
            if identifier in lock or self.is_installed(identifier):
                return Classification.PRESENT
        return Classification.MISSING

    def resolve_github(self, dependency: GitHubDependency) -> Classification:
        if self.is_installed(dependency.local_slug):
            return Classification.PRESENT
        return Classification.MISSING

    def resolve(self, dependency: Dependency) -> Classification:
        if dependency.source == DependencySource.CLAWHUB:
            return self.resolve_clawhub(dependency)
        return self.resolve_github(dependency)
