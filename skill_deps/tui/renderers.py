from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from skill_deps.manifest.models import SkillManifest
from skill_deps.models import (
    CheckReport,
    ClassificationResult,
    InstallOutcome,
    InstallReport,
    PlannedInstall,
)
from skill_deps.tui.enums import UIStyle
from skill_deps.tui.sections import UISection
from skill_deps.tui.tables import ClassificationTable, InstallTable, ManifestTable
from skill_deps.utils import compact_home_path


class DepsConsoleUI:
    """Render resolver results; ``quiet`` keeps only errors and failures."""

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
        quiet: bool = False,
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or self.console
        self.quiet = quiet

    def _print(self, renderable) -> None:
        if not self.quiet:
            self.console.print(renderable)

    def render_error(self, message: str) -> None:
        self.err_console.print(UISection.bullets("error", [message], style=UIStyle.RED.value))

    def render_nothing_to_do(self, manifest_path: Optional[Path] = None) -> None:
        location = f" ({compact_home_path(manifest_path)})" if manifest_path else ""
        self._print(
            UISection.note(
                "dependencies",
                escape(f"No dependencies declared in SKILL.md frontmatter{location}."),
                style=UIStyle.DIM.value,
            )
        )

    def render_overview(self, manifest: SkillManifest, manifest_path: Path, mode: str) -> None:
        self._print(
            UISection.wrap(
                "dependency overview",
                ManifestTable.summary_block(manifest, manifest_path, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )

    def render_list(self, manifest: SkillManifest) -> None:
        if manifest.clawhub:
            self._print(
                UISection.wrap(
                    "clawhub",
                    ManifestTable.dependencies_table(list(manifest.clawhub)),
                    style=UIStyle.CYAN.value,
                )
            )
        if manifest.github:
            self._print(
                UISection.wrap(
                    "github",
                    ManifestTable.dependencies_table(list(manifest.github)),
                    style=UIStyle.MAGENTA.value,
                )
            )

    def render_classification(self, result: ClassificationResult) -> None:
        if result.lock_error:
            self._print(
                UISection.bullets(
                    "lock file",
                    [f"Ignoring unreadable lock file ({result.lock_error})"],
                    style=UIStyle.YELLOW.value,
                )
            )
        if result.present:
            self._print(
                UISection.wrap(
                    "already installed",
                    ClassificationTable.resolved_table(result.present),
                    style=UIStyle.GREEN.value,
                )
            )
        if result.missing:
            self._print(
                UISection.wrap(
                    f"missing ({len(result.missing)})",
                    ClassificationTable.resolved_table(result.missing),
                    style=UIStyle.YELLOW.value,
                )
            )
        else:
            self._print(
                UISection.note(
                    "dependencies", "All dependencies satisfied.", style=UIStyle.GREEN.value
                )
            )

    def render_check(self, report: CheckReport) -> None:
        if not report.satisfied:
            self.err_console.print(ClassificationTable.stats_panel(report.classification))
            self.err_console.print(
                UISection.note(
                    "check",
                    f"{report.unmet_required} required dependencies missing.",
                    style=UIStyle.RED.value,
                )
            )
            return
        self._print(ClassificationTable.stats_panel(report.classification))
        self._print(
            UISection.note(
                "check",
                "All required dependencies satisfied (some optional deps missing).",
                style=UIStyle.GREEN.value,
            )
        )

    def render_plan(self, planned: list[PlannedInstall]) -> None:
        self._print(
            UISection.wrap(
                "dry run: would install",
                InstallTable.plan_table(planned),
                style=UIStyle.CYAN.value,
            )
        )

    def render_outcome(self, outcome: InstallOutcome) -> None:
        if outcome.success:
            self._print(InstallTable.outcome_line(outcome))
            return
        self.err_console.print(InstallTable.outcome_line(outcome))

    def render_install_result(self, report: InstallReport) -> None:
        console = self.err_console if report.failed else self.console
        if report.failed or not self.quiet:
            console.print(InstallTable.stats_panel(report))
        if report.failures:
            self.err_console.print(
                UISection.bullets("failures", report.failures, style=UIStyle.RED.value)
            )
        if report.aborted:
            self.err_console.print(
                UISection.note(
                    "aborted",
                    f"Required dependency {escape(report.aborted_on or '')} failed to install.",
                    style=UIStyle.RED.value,
                )
            )
