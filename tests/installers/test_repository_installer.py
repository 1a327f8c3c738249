from pathlib import Path

import pytest

from skill_deps.config import ResolverConfig
from skill_deps.installers.base import CommandResult
from skill_deps.installers.repository import GitHubInstaller
from skill_deps.manifest.models import GitHubDependency


DEPENDENCY = GitHubDependency(repo="org/proj", path="skills/x")


def _materialize(subdir: str = "skills/x", clone_code: int = 0, checkout_code: int = 0):
    """Fake git: clone creates the scratch repo, sparse-checkout fills the subdirectory."""

    def _handler(argv: tuple[str, ...]) -> CommandResult:
        if argv[1] == "clone":
            scratch = Path(argv[-1])
            if clone_code == 0:
                (scratch / ".git").mkdir(parents=True)
            return CommandResult(argv=argv, returncode=clone_code, stderr="clone failed")
        scratch = Path(argv[2])
        if checkout_code == 0 and subdir:
            target = scratch / subdir
            target.mkdir(parents=True)
            (target / "SKILL.md").write_text("---\nname: x\n---\n", encoding="utf-8")
            (target / "notes.txt").write_text("notes", encoding="utf-8")
        return CommandResult(argv=argv, returncode=checkout_code, stderr="checkout failed")

    return _handler


def test_skips_existing_target_without_force(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    (workspace / "skills" / "x").mkdir()
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is True
    assert outcome.skipped is True
    assert fake_runner.calls == []


def test_sparse_clone_and_copy(config: ResolverConfig, workspace: Path, fake_runner) -> None:
    fake_runner.handler = _materialize()
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    scratch = workspace / ".tmp-dep-x"
    assert outcome.success is True
    assert outcome.skipped is False
    assert fake_runner.calls == [
        (
            "git",
            "clone",
            "--depth",
            "1",
            "--filter=blob:none",
            "--sparse",
            "https://github.com/org/proj.git",
            str(scratch),
        ),
        ("git", "-C", str(scratch), "sparse-checkout", "set", "skills/x"),
    ]
    assert (workspace / "skills" / "x" / "SKILL.md").is_file()
    assert (workspace / "skills" / "x" / "notes.txt").read_text(encoding="utf-8") == "notes"
    assert not scratch.exists()


def test_force_replaces_existing_target(workspace: Path, fake_runner) -> None:
    stale = workspace / "skills" / "x"
    stale.mkdir()
    (stale / "stale.txt").write_text("old", encoding="utf-8")
    fake_runner.handler = _materialize()
    installer = GitHubInstaller(ResolverConfig(workspace=workspace, force=True), runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is True
    assert not (stale / "stale.txt").exists()
    assert (stale / "SKILL.md").is_file()


def test_missing_subdirectory_fails_and_cleans_up(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    fake_runner.handler = _materialize(subdir="")
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is False
    assert outcome.reason == "Path skills/x not found in org/proj"
    assert not (workspace / ".tmp-dep-x").exists()
    assert not (workspace / "skills" / "x").exists()


def test_clone_failure_reports_git_message(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    fake_runner.handler = _materialize(clone_code=128)
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is False
    assert outcome.reason == "Failed to install x from GitHub: clone failed"
    assert len(fake_runner.calls) == 1
    assert not (workspace / ".tmp-dep-x").exists()


def test_checkout_failure_removes_scratch(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    fake_runner.handler = _materialize(checkout_code=1)
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is False
    assert "checkout failed" in (outcome.reason or "")
    assert not (workspace / ".tmp-dep-x").exists()


def test_leftover_scratch_is_replaced(config: ResolverConfig, workspace: Path, fake_runner) -> None:
    leftover = workspace / ".tmp-dep-x"
    leftover.mkdir()
    (leftover / "junk").write_text("junk", encoding="utf-8")
    fake_runner.handler = _materialize()
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(DEPENDENCY)

    assert outcome.success is True
    assert not leftover.exists()


def test_empty_path_fails_without_cloning(config: ResolverConfig, fake_runner) -> None:
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(GitHubDependency(repo="org/proj", path=""))

    assert outcome.success is False
    assert fake_runner.calls == []


def test_path_escaping_checkout_is_rejected(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    (workspace / "outside").mkdir()
    fake_runner.handler = _materialize(subdir="")
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(GitHubDependency(repo="org/proj", path="../outside"))

    assert outcome.success is False
    assert outcome.reason == "Path ../outside not found in org/proj"
    assert not (workspace / "skills" / "outside").exists()


def test_describe_and_custom_base_url(workspace: Path) -> None:
    installer = GitHubInstaller(
        ResolverConfig(workspace=workspace, github_base_url="https://git.example.com/")
    )

    assert installer.describe(DEPENDENCY) == "git sparse-checkout org/proj:skills/x -> skills/x"
    assert installer.clone_url(DEPENDENCY) == "https://git.example.com/org/proj.git"


def test_empty_path_fails_even_when_skills_dir_exists(
    config: ResolverConfig, workspace: Path, fake_runner
) -> None:
    assert (workspace / "skills").is_dir()
    installer = GitHubInstaller(config, runner=fake_runner)

    outcome = installer.install(GitHubDependency(repo="org/proj", path=""))

    assert outcome.skipped is False
    assert outcome.reason == "Path  not found in org/proj"


@pytest.mark.parametrize("path", ["skills/.", "skills/..", ".", ".."])
@pytest.mark.parametrize("force", [False, True])
def test_dot_segments_never_touch_skills_or_workspace(
    workspace: Path, install_skill, write_lock, fake_runner, path: str, force: bool
) -> None:
    precious = install_skill(workspace, "precious")
    lock = write_lock(workspace, '{"skills": {}}')
    fake_runner.handler = _materialize(subdir="skills")
    installer = GitHubInstaller(ResolverConfig(workspace=workspace, force=force), runner=fake_runner)

    outcome = installer.install(GitHubDependency(repo="org/proj", path=path))

    assert outcome.success is False
    assert outcome.skipped is False
    assert outcome.reason == f"Path {path} not found in org/proj"
    assert fake_runner.calls == []
    assert (precious / "SKILL.md").is_file()
    assert lock.is_file()
