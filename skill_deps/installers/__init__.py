from skill_deps.installers.base import CommandResult, CommandRunner, Installer
from skill_deps.installers.registry import ClawHubInstaller
from skill_deps.installers.repository import GitHubInstaller

__all__ = [
    "ClawHubInstaller",
    "CommandResult",
    "CommandRunner",
    "GitHubInstaller",
    "Installer",
]
