from skill_deps.manifest.models import (
    ClawHubDependency,
    Dependency,
    DependencySource,
    GitHubDependency,
    SkillManifest,
)
from skill_deps.manifest.parser import find_manifest, load_manifest, parse_manifest

__all__ = [
    "ClawHubDependency",
    "Dependency",
    "DependencySource",
    "GitHubDependency",
    "SkillManifest",
    "find_manifest",
    "load_manifest",
    "parse_manifest",
]
