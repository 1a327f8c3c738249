"""Resolver configuration threaded explicitly from the CLI into the core."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from skill_deps.constants import (
    CHECKOUT_TIMEOUT_SECONDS,
    CLAWHUB_EXECUTABLE,
    CLONE_TIMEOUT_SECONDS,
    DEFAULT_WORKSPACE_PARTS,
    GIT_EXECUTABLE,
    GITHUB_BASE_URL,
    LOCK_DIRNAME,
    LOCK_FILENAME,
    REGISTRY_TIMEOUT_SECONDS,
    SKILLS_DIRNAME,
    WORKSPACE_ENV_VAR,
)


def default_workspace(env: Optional[Mapping[str, str]] = None) -> Path:
    values = os.environ if env is None else env
    override = values.get(WORKSPACE_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home().joinpath(*DEFAULT_WORKSPACE_PARTS)


@dataclass(frozen=True)
class ResolverConfig:
    workspace: Path = field(default_factory=default_workspace)
    force: bool = False
    clawhub_executable: str = CLAWHUB_EXECUTABLE
    git_executable: str = GIT_EXECUTABLE
    registry_timeout: int = REGISTRY_TIMEOUT_SECONDS
    clone_timeout: int = CLONE_TIMEOUT_SECONDS
    checkout_timeout: int = CHECKOUT_TIMEOUT_SECONDS
    github_base_url: str = GITHUB_BASE_URL

    @classmethod
    def from_env(
        cls, env: Optional[Mapping[str, str]] = None, **overrides: Any
    ) -> "ResolverConfig":
        if overrides.get("workspace") is None:
            overrides["workspace"] = default_workspace(env)
        return cls(**overrides)

    @property
    def skills_dir(self) -> Path:
        return self.workspace / SKILLS_DIRNAME

    @property
    def lock_path(self) -> Path:
        return self.workspace / LOCK_DIRNAME / LOCK_FILENAME
