from collections import Counter
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from skill_deps.manifest.models import Dependency, SkillManifest
from skill_deps.models import (
    ClassificationResult,
    InstallOutcome,
    InstallReport,
    PlannedInstall,
    ResolvedDependency,
)
from skill_deps.tui.enums import CLASSIFICATION_STYLE, UIStyle
from skill_deps.utils import compact_home_path


def _requirement(dependency: Dependency) -> str:
    if dependency.required:
        return f"[{UIStyle.RED.value}]required[/{UIStyle.RED.value}]"
    return f"[{UIStyle.YELLOW.value}]optional[/{UIStyle.YELLOW.value}]"


class ManifestTable:
    @staticmethod
    def summary_block(manifest: SkillManifest, manifest_path: Path, mode: str):
        counts = Counter(dependency.source.value for dependency in manifest.dependencies)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Skill", escape(manifest.name or "Skill"))
        table.add_row("Manifest", escape(compact_home_path(manifest_path)))
        table.add_row("Mode", mode)
        table.add_row("Dependencies", str(manifest.total))
        table.add_row("Sources", "  ".join(chips))
        return table

    @staticmethod
    def dependencies_table(dependencies: list[Dependency]) -> Table:
        table = Table(
            Column(header="Source", width=8),
            Column(header="Dependency", overflow="ellipsis", min_width=24, max_width=48),
            Column(header="Need", width=8),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for dependency in dependencies:
            table.add_row(
                dependency.source.value,
                escape(dependency.label),
                _requirement(dependency),
                escape(dependency.description),
            )
        return table


class ClassificationTable:
    @staticmethod
    def resolved_table(items: list[ResolvedDependency]) -> Table:
        table = Table(
            Column(header="Source", width=8),
            Column(header="Slug", overflow="ellipsis", max_width=40),
            Column(header="Status", width=8),
            Column(header="Need", width=8),
            expand=True,
            header_style="bold",
        )
        for item in items:
            style = CLASSIFICATION_STYLE.get(item.classification, UIStyle.WHITE.value)
            table.add_row(
                item.source.value,
                escape(item.slug),
                f"[{style}]{item.classification.value}[/{style}]",
                _requirement(item.dependency),
            )
        return table

    @staticmethod
    def stats_panel(result: ClassificationResult, title: str = "check") -> Panel:
        stats: dict[str, str] = {
            "present": str(len(result.present)),
            "missing": str(len(result.missing)),
            "required missing": str(len(result.required_missing)),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title=title,
            border_style=UIStyle.GREEN.value
            if not result.required_missing
            else UIStyle.RED.value,
        )


class InstallTable:
    @staticmethod
    def plan_table(planned: list[PlannedInstall]) -> Table:
        table = Table(
            Column(header="Source", width=8),
            Column(header="Need", width=8),
            Column(header="Action", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for item in planned:
            table.add_row(
                item.dependency.source.value,
                _requirement(item.dependency),
                escape(item.command),
            )
        return table

    @staticmethod
    def outcome_line(outcome: InstallOutcome) -> str:
        slug = escape(outcome.slug or outcome.dependency.label)
        if not outcome.success:
            return f"[{UIStyle.RED.value}]x[/{UIStyle.RED.value}] {slug}"
        if outcome.skipped:
            detail = escape(outcome.reason or "already exists")
            return f"[{UIStyle.DIM.value}]= {slug} ({detail})[/{UIStyle.DIM.value}]"
        return f"[{UIStyle.GREEN.value}]+[/{UIStyle.GREEN.value}] {slug}"

    @staticmethod
    def stats_panel(report: InstallReport) -> Panel:
        stats: dict[str, str] = {
            "installed": str(report.installed),
            "failed": str(report.failed),
            "already present": str(report.already_present),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return Panel(
            table,
            title="install",
            border_style=UIStyle.GREEN.value if report.failed == 0 else UIStyle.RED.value,
        )
