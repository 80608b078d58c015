"""
Rich renderables for the roadmap and the mentor panel.

Pure presentation: every function takes already-derived state and returns a
renderable, so the CLI decides what to print.
"""

from __future__ import annotations

from rich import box
from rich.console import Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from pathfinder.mentor.interaction import InteractionSession, InteractionStatus
from pathfinder.roadmap.models import (
    CapstoneBrief,
    StageCatalog,
    StageDefinition,
    StageStatus,
)

# Stage accent colours from the roadmap file, mapped to terminal colours
STAGE_COLORS = {
    "blue": "blue",
    "indigo": "slate_blue1",
    "purple": "medium_purple",
    "pink": "hot_pink",
    "emerald": "green3",
    "cyan": "cyan",
    "orange": "dark_orange",
}


def _accent(stage: StageDefinition) -> str:
    return STAGE_COLORS.get(stage.color, "blue")


# =============================================================================
# Roadmap
# =============================================================================


def render_roadmap(catalog: StageCatalog, statuses: list[StageStatus], capstone_unlocked: bool) -> Table:
    """Overview table: one row per stage plus the capstone gate."""
    table = Table(title="DevOps Pathfinder", box=box.ROUNDED, expand=False)
    table.add_column("Stage", style="bold")
    table.add_column("Title")
    table.add_column("Progress", min_width=24)
    table.add_column("Status")

    for stage, status in zip(catalog, statuses):
        accent = _accent(stage)
        bar = Table.grid(padding=(0, 1))
        bar.add_row(
            ProgressBar(total=100, completed=status.completion_percent, width=16, complete_style=accent),
            f"{status.completion_percent:>3}%",
        )
        if status.is_complete:
            state = "[green]✓ complete[/]"
        elif status.unlocked:
            state = f"[{accent}]● open[/]"
        else:
            state = "[dim]🔒 locked[/]"
        title = stage.title if status.unlocked else f"[dim]{stage.title}[/]"
        table.add_row(stage.id, title, bar, state)

    capstone_state = "[bold green]★ unlocked[/]" if capstone_unlocked else "[dim]🔒 locked[/]"
    table.add_row("★", "The Final Boss: Capstone Project", "", capstone_state)
    return table


def render_skills(catalog: StageCatalog, inventory: frozenset[str]) -> Table:
    """Skill checklist grouped by category."""
    table = Table(title="Skill Inventory", box=box.SIMPLE_HEAD)
    table.add_column("", width=3)
    table.add_column("Skill ID", style="cyan")
    table.add_column("Skill")

    for category in catalog.categories:
        table.add_row("", f"[bold]{category.title}[/]", "")
        for skill in category.skills:
            mark = "[green]☑[/]" if skill.id in inventory else "☐"
            table.add_row(mark, skill.id, skill.label)
    return table


def render_stage(
    catalog: StageCatalog,
    stage: StageDefinition,
    status: StageStatus,
    inventory: frozenset[str],
    show_extras: bool = False,
) -> Panel:
    """Stage detail: required skills, project brief, and optionally the extras."""
    accent = _accent(stage)
    parts: list = [Text(stage.description, style="italic")]

    skills = Table.grid(padding=(0, 1))
    for skill in catalog.stage_skills(stage):
        mark = "[green]☑[/]" if skill.id in inventory else "☐"
        skills.add_row(mark, skill.label)
    parts.extend([Text(f"\nRequired skills ({status.completion_percent}%)", style="bold"), skills])

    project = stage.project
    if project is not None:
        parts.append(Text(f"\n{project.title}", style=f"bold {accent}"))
        parts.append(Text(f"Goal: {project.goal}"))
        tasks = Table(box=box.MINIMAL, show_header=True)
        tasks.add_column("#", justify="right")
        tasks.add_column("Topic", style=accent)
        tasks.add_column("Task")
        for number, item in enumerate(project.tasks, start=1):
            tasks.add_row(str(number), item.topic, item.task)
        parts.append(tasks)

        if show_extras:
            if project.hints:
                parts.append(Text("Pro Tips", style="bold yellow"))
                parts.extend(Text(f"  • {hint}") for hint in project.hints)
            if project.resources:
                parts.append(Text("\nResources", style="bold"))
                parts.extend(Text(f"  • {res.name}: {res.url}") for res in project.resources)
            if project.guide:
                parts.append(Text("\nStep-by-step guide", style="bold"))
                parts.extend(Text(f"  {i}. {step}") for i, step in enumerate(project.guide, start=1))
            if project.cheat_sheet:
                sheet = Table(title="Cheat Sheet", box=box.MINIMAL)
                sheet.add_column("Command", style="green")
                sheet.add_column("Description")
                for entry in project.cheat_sheet:
                    sheet.add_row(entry.cmd, entry.desc)
                parts.append(sheet)
        else:
            parts.append(Text("\nRun with --extras for hints, resources, guide and cheat sheet.", style="dim"))

    return Panel(Group(*parts), title=f"[bold]{stage.title}[/]", border_style=accent)


def render_locked_stage(stage: StageDefinition, previous: StageDefinition, missing: list[str]) -> Panel:
    body = (
        f"Complete [bold]{previous.title}[/] first.\n"
        f"Missing skills: {', '.join(missing) if missing else 'none'}"
    )
    return Panel(body, title=f"🔒 {stage.title}", border_style="dim")


def render_capstone(brief: CapstoneBrief | None, unlocked: bool, last_stage: StageDefinition, missing: list[str]) -> Panel:
    """Capstone gate: the brief when unlocked, what is missing otherwise."""
    if not unlocked:
        body = (
            "Locked: Complete all previous phases.\n"
            f"[dim]{last_stage.title} still needs: {', '.join(missing)}[/]"
        )
        return Panel(body, title="🔒 The Final Boss: Capstone Project", border_style="dim")

    if brief is None:
        return Panel("Capstone unlocked!", title="★ Capstone", border_style="green")

    parts: list = []
    if brief.subtitle:
        parts.append(Text(brief.subtitle, style="italic"))
    if brief.summary:
        parts.append(Text(brief.summary))
    for heading, items in (
        ("Architecture Requirements", brief.architecture),
        ("Operational Requirements", brief.operations),
        ("Evaluation Criteria", brief.evaluation),
    ):
        if items:
            parts.append(Text(f"\n{heading}", style="bold cyan"))
            parts.extend(Text(f"  • {item}") for item in items)
    return Panel(Group(*parts), title=f"★ {brief.title}", border_style="green")


# =============================================================================
# Mentor
# =============================================================================


def render_mentor(session: InteractionSession) -> Panel | None:
    """The mentor panel for the current session, or None when idle."""
    if session.status == InteractionStatus.IDLE:
        return None
    if session.status == InteractionStatus.LOADING:
        body = Text("Generating DevOps insights...", style="dim italic")
        border = "slate_blue1"
    elif session.status == InteractionStatus.ERROR:
        body = Text.assemble(("AI Connection Error\n", "bold red"), (session.error or "", "red"))
        border = "red"
    else:
        body = Markdown(session.text)
        border = "medium_purple"
    return Panel(body, title="🤖 DevOps Assistant", subtitle=session.title, border_style=border)
