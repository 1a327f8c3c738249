"""Dependency manifest data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from skill_deps.utils import last_path_segment


class DependencySource(str, Enum):
    CLAWHUB = "clawhub"
    GITHUB = "github"


@dataclass(frozen=True)
class ClawHubDependency:
    slug: str
    aliases: tuple[str, ...] = ()
    version: Optional[str] = None
    required: bool = True
    description: str = ""
    source: DependencySource = field(default=DependencySource.CLAWHUB, init=False)

    @property
    def local_slug(self) -> str:
        return self.slug

    @property
    def identifiers(self) -> tuple[str, ...]:
        return (self.slug, *self.aliases)

    @property
    def label(self) -> str:
        return f"{self.slug} {self.version}" if self.version else self.slug


@dataclass(frozen=True)
class GitHubDependency:
    repo: str
    path: str = ""
    required: bool = True
    description: str = ""
    source: DependencySource = field(default=DependencySource.GITHUB, init=False)

    @property
    def local_slug(self) -> str:
        return last_path_segment(self.path)

    @property
    def identifiers(self) -> tuple[str, ...]:
        return (self.local_slug,)

    @property
    def label(self) -> str:
        return f"{self.repo}:{self.path}"


Dependency = Union[ClawHubDependency, GitHubDependency]


@dataclass(frozen=True)
class SkillManifest:
    name: str = ""
    clawhub: tuple[ClawHubDependency, ...] = ()
    github: tuple[GitHubDependency, ...] = ()

    @property
    def dependencies(self) -> list[Dependency]:
        return [*self.clawhub, *self.github]

    @property
    def total(self) -> int:
        return len(self.clawhub) + len(self.github)

    def is_empty(self) -> bool:
        return self.total == 0
