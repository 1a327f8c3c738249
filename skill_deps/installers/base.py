import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from skill_deps.manifest.models import Dependency
from skill_deps.models import InstallOutcome


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def detail(self) -> str:
        text = (self.stderr or self.stdout or "").strip()
        if text:
            return text
        if self.returncode is None:
            return f"{self.argv[0]} did not complete"
        return f"{self.argv[0]} exited with status {self.returncode}"


class CommandRunner:
    """Run an external process to completion with a bounded timeout."""

    def run(
        self, argv: Sequence[str], timeout: int, cwd: Optional[Path] = None
    ) -> CommandResult:
        args = tuple(argv)
        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                errors="replace",
                check=False,
                timeout=max(1, int(timeout)),
                cwd=str(cwd) if cwd is not None else None,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                argv=args,
                returncode=None,
                stderr=f"{args[0]} timed out after {timeout}s",
            )
        except OSError as exc:
            return CommandResult(argv=args, returncode=None, stderr=str(exc))
        return CommandResult(
            argv=args,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


class Installer(Protocol):
    def install(self, dependency: Dependency) -> InstallOutcome: ...

    def describe(self, dependency: Dependency) -> str: ...
