from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console

from skill_deps.config import ResolverConfig
from skill_deps.errors import SkillDepsError
from skill_deps.manifest.models import SkillManifest
from skill_deps.manifest.parser import load_manifest
from skill_deps.models import ClassificationResult, RunMode
from skill_deps.resolver import DependencyResolver
from skill_deps.tui import DepsConsoleUI


def _common_options(func: Callable) -> Callable:
    func = click.option(
        "--quiet", "-q", is_flag=True, help="Suppress non-error output."
    )(func)
    func = click.option(
        "--workspace",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Workspace root (default: $OPENCLAW_WORKSPACE or ~/.openclaw/workspace).",
    )(func)
    func = click.option(
        "--skill-path",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Skill directory holding SKILL.md (default: cwd, then workspace).",
    )(func)
    return func


def _build(
    skill_path: Optional[Path],
    workspace: Optional[Path],
    quiet: bool,
    force: bool = False,
) -> tuple[DepsConsoleUI, DependencyResolver, SkillManifest, Path]:
    ui = DepsConsoleUI(Console(), err_console=Console(stderr=True), quiet=quiet)
    config = ResolverConfig.from_env(
        workspace=workspace.expanduser().resolve() if workspace else None,
        force=force,
    )
    resolver = DependencyResolver(config)
    try:
        path = resolver.locate(skill_path.expanduser().resolve() if skill_path else None)
        manifest = load_manifest(path)
    except SkillDepsError as exc:
        ui.render_error(str(exc))
        raise click.exceptions.Exit(1)
    return ui, resolver, manifest, path


def _classify(
    ui: DepsConsoleUI,
    resolver: DependencyResolver,
    manifest: SkillManifest,
    path: Path,
    mode: RunMode,
) -> Optional[ClassificationResult]:
    if manifest.is_empty():
        ui.render_nothing_to_do(path)
        return None

    ui.render_overview(manifest, path, mode=mode.value)
    classification = resolver.classify(manifest)
    ui.render_classification(classification)
    if classification.satisfied:
        return None
    return classification


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Resolve and install dependencies declared in SKILL.md frontmatter."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


@cli.command("list", help="List declared dependencies and exit.")
@_common_options
def list_(skill_path: Optional[Path], workspace: Optional[Path], quiet: bool) -> None:
    ui, _, manifest, path = _build(skill_path, workspace, quiet)
    if manifest.is_empty():
        ui.render_nothing_to_do(path)
        return
    ui.render_overview(manifest, path, mode=RunMode.LIST.value)
    ui.render_list(manifest)


@cli.command(help="Exit 1 if any required dependency is missing.")
@_common_options
def check(skill_path: Optional[Path], workspace: Optional[Path], quiet: bool) -> None:
    ui, resolver, manifest, path = _build(skill_path, workspace, quiet)
    classification = _classify(ui, resolver, manifest, path, RunMode.CHECK)
    if classification is None:
        return

    report = resolver.check(manifest, classification)
    ui.render_check(report)
    if not report.satisfied:
        raise click.exceptions.Exit(1)


@cli.command("dry-run", help="Show what would be installed without installing.")
@_common_options
def dry_run(skill_path: Optional[Path], workspace: Optional[Path], quiet: bool) -> None:
    ui, resolver, manifest, path = _build(skill_path, workspace, quiet)
    classification = _classify(ui, resolver, manifest, path, RunMode.DRY_RUN)
    if classification is None:
        return

    ui.render_plan(resolver.plan(manifest, classification))


@cli.command(help="Install missing dependencies (default command).")
@_common_options
@click.option("--force", is_flag=True, help="Force registry installs and replace existing checkouts.")
def install(
    skill_path: Optional[Path], workspace: Optional[Path], quiet: bool, force: bool
) -> None:
    ui, resolver, manifest, path = _build(skill_path, workspace, quiet, force=force)
    classification = _classify(ui, resolver, manifest, path, RunMode.INSTALL)
    if classification is None:
        return

    report = resolver.install(manifest, classification, on_outcome=ui.render_outcome)
    ui.render_install_result(report)
    if not report.ok:
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
