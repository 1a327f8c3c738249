import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from skill_deps.config import ResolverConfig  # noqa: E402
from skill_deps.installers.base import CommandResult, CommandRunner  # noqa: E402


SAMPLE_SKILL = (
    "---\n"
    "name: my-flavor\n"
    "description: Sample flavor\n"
    "dependencies:\n"
    "  clawhub:\n"
    "    - slug: everclaw-inference\n"
    '      version: ">=0.9.0"\n'
    "      required: true\n"
    "    - slug: three-shifts\n"
    "      required: false\n"
    '      description: "Cyclic task execution"\n'
    "  github:\n"
    "    - repo: profbernardoj/everclaw\n"
    "      path: skills/pii-guard\n"
    '      description: "PII leak prevention"\n'
    "---\n"
    "\n"
    "# My Flavor\n"
)


class FakeRunner(CommandRunner):
    """Record argv and answer from a script instead of spawning processes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.handler: Optional[Callable[[tuple[str, ...]], CommandResult]] = None

    def run(
        self, argv: Sequence[str], timeout: int, cwd: Optional[Path] = None
    ) -> CommandResult:
        args = tuple(argv)
        self.calls.append(args)
        if self.handler is not None:
            return self.handler(args)
        return CommandResult(argv=args, returncode=0)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("OPENCLAW_WORKSPACE", raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    (root / "skills").mkdir(parents=True)
    return root


@pytest.fixture
def skill_dir(tmp_path: Path) -> Path:
    root = tmp_path / "flavor"
    root.mkdir()
    return root


@pytest.fixture
def write_skill():
    def _write(directory: Path, text: str = SAMPLE_SKILL) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "SKILL.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def install_skill():
    def _install(workspace: Path, slug: str) -> Path:
        target = workspace / "skills" / slug
        target.mkdir(parents=True, exist_ok=True)
        (target / "SKILL.md").write_text(f"---\nname: {slug}\n---\n", encoding="utf-8")
        return target

    return _install


@pytest.fixture
def write_lock():
    def _write(workspace: Path, text: str) -> Path:
        path = workspace / ".clawhub" / "lock.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config(workspace: Path) -> ResolverConfig:
    return ResolverConfig(workspace=workspace)


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
