"""
Pathfinder CLI - DevOps roadmap tracker with an AI mentor.

Usage:
    pathfinder roadmap                 # Stage overview with progress
    pathfinder skills                  # Skill checklist
    pathfinder toggle docker jenkins   # Check / uncheck skills
    pathfinder stage 2 --extras        # Project brief, hints, cheat sheet
    pathfinder guide 2 3               # AI guide for task 3 of stage 2
    pathfinder scenario 2              # AI troubleshooting challenge
    pathfinder capstone                # Final project gate
    pathfinder reset                   # Clear all progress
    pathfinder menu                    # Interactive session
"""

from __future__ import annotations

import asyncio
import sys
from typing import Annotated

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from config import Settings, get_settings
from pathfinder.delivery import views
from pathfinder.integrations.gemini_client import GeminiClient
from pathfinder.mentor import prompts
from pathfinder.mentor.interaction import MentorInteraction
from pathfinder.roadmap import engine
from pathfinder.roadmap.catalog import CatalogError, load_catalog
from pathfinder.roadmap.inventory import InventoryStore
from pathfinder.roadmap.models import StageDefinition
from pathfinder.roadmap.tracker import ProgressTracker

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="pathfinder",
    help="🧭 Pathfinder - DevOps roadmap tracker with an AI mentor",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def get_tracker(settings: Settings | None = None) -> ProgressTracker:
    """Load the roadmap and the learner's progress."""
    settings = settings or get_settings()
    try:
        catalog = load_catalog(settings.catalog_file)
    except CatalogError as e:
        console.print(f"[red]Roadmap error: {e}[/]")
        raise typer.Exit(1) from e
    return ProgressTracker(catalog, InventoryStore(settings.progress_file))


def _find_stage(tracker: ProgressTracker, stage_id: str) -> StageDefinition:
    try:
        return tracker.catalog.get_stage(stage_id)
    except KeyError:
        ids = ", ".join(stage.id for stage in tracker.catalog)
        console.print(f"[red]Unknown stage '{stage_id}'. Available: {ids}[/]")
        raise typer.Exit(1) from None


def _require_unlocked(tracker: ProgressTracker, stage: StageDefinition) -> None:
    if tracker.is_stage_unlocked(stage):
        return
    previous = tracker.catalog[stage.index - 1]
    console.print(
        views.render_locked_stage(stage, previous, engine.missing_skills(previous, tracker.inventory))
    )
    raise typer.Exit(1)


def _print_roadmap(tracker: ProgressTracker) -> None:
    console.print(views.render_roadmap(tracker.catalog, tracker.overview(), tracker.capstone_unlocked))


# =============================================================================
# Progress Commands
# =============================================================================


@app.command()
def roadmap() -> None:
    """Show every stage with its progress and lock state."""
    tracker = get_tracker()
    _print_roadmap(tracker)


@app.command()
def skills() -> None:
    """Show the skill checklist."""
    tracker = get_tracker()
    console.print(views.render_skills(tracker.catalog, tracker.inventory))


@app.command()
def toggle(
    skill_ids: Annotated[list[str], typer.Argument(help="Skill IDs to check or uncheck")],
) -> None:
    """
    Check or uncheck skills.

    Examples:
        pathfinder toggle linux git
    """
    tracker = get_tracker()
    known = tracker.catalog.skills

    unknown = [skill_id for skill_id in skill_ids if skill_id not in known]
    if unknown:
        console.print(f"[red]Unknown skill(s): {', '.join(unknown)}[/]")
        console.print("[dim]Run 'pathfinder skills' to list skill IDs.[/]")
        raise typer.Exit(1)

    for skill_id in skill_ids:
        held = tracker.toggle_skill(skill_id)
        mark = "[green]☑[/]" if held else "☐"
        console.print(f"{mark} {known[skill_id].label}")

    _print_roadmap(tracker)


@app.command()
def reset(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")
    ] = False,
) -> None:
    """Reset all progress. This cannot be undone."""
    tracker = get_tracker()

    def confirm() -> bool:
        return yes or typer.confirm(
            "Are you sure you want to reset your progress? This cannot be undone."
        )

    if tracker.reset(confirm):
        console.print("[green]✓ Progress reset[/]")
    else:
        console.print("[yellow]Reset cancelled[/]")


# =============================================================================
# Stage Commands
# =============================================================================


@app.command()
def stage(
    stage_id: Annotated[str, typer.Argument(help="Stage ID, e.g. 1, 1-bonus, 2")],
    extras: Annotated[
        bool, typer.Option("--extras", "-e", help="Show hints, resources, guide and cheat sheet")
    ] = False,
) -> None:
    """Show a stage's project brief."""
    tracker = get_tracker()
    definition = _find_stage(tracker, stage_id)
    _require_unlocked(tracker, definition)
    console.print(
        views.render_stage(
            tracker.catalog,
            definition,
            tracker.status(definition),
            tracker.inventory,
            show_extras=extras,
        )
    )


@app.command()
def capstone() -> None:
    """Show the capstone project, or what still blocks it."""
    tracker = get_tracker()
    last = tracker.catalog.last
    console.print(
        views.render_capstone(
            tracker.catalog.capstone,
            tracker.capstone_unlocked,
            last,
            engine.missing_skills(last, tracker.inventory),
        )
    )


# =============================================================================
# Mentor Commands
# =============================================================================


async def _ask_mentor(title: str, prompt: str, failure_message: str, settings: Settings) -> None:
    logger.debug(f"Mentor config: {settings.get_mentor_config()}")
    async with GeminiClient.from_settings(settings) as client:
        mentor = MentorInteraction(client)
        with console.status("[slate_blue1]Generating DevOps insights...[/]"):
            await mentor.start(title, prompt, failure_message)
    panel = views.render_mentor(mentor.session)
    if panel is not None:
        console.print(panel)


def _task_request(definition: StageDefinition, task_number: int) -> tuple[str, str]:
    tasks = definition.project.tasks if definition.project else ()
    if not 1 <= task_number <= len(tasks):
        console.print(f"[red]Stage '{definition.id}' has {len(tasks)} task(s).[/]")
        raise typer.Exit(1)
    task = tasks[task_number - 1].task
    return prompts.task_guide_title(task), prompts.task_guide_prompt(task)


def _scenario_request(tracker: ProgressTracker, definition: StageDefinition) -> tuple[str, str]:
    labels = [skill.label for skill in tracker.catalog.stage_skills(definition)]
    return (
        prompts.troubleshoot_title(definition.title),
        prompts.troubleshoot_prompt(definition.title, labels),
    )


@app.command()
def guide(
    stage_id: Annotated[str, typer.Argument(help="Stage ID")],
    task_number: Annotated[int, typer.Argument(help="Task number as listed by 'stage'")],
) -> None:
    """Ask the AI mentor for a step-by-step guide to one task."""
    settings = get_settings()
    tracker = get_tracker(settings)
    definition = _find_stage(tracker, stage_id)
    _require_unlocked(tracker, definition)
    title, prompt = _task_request(definition, task_number)
    asyncio.run(_ask_mentor(title, prompt, prompts.TASK_GUIDE_FAILURE, settings))


@app.command()
def scenario(
    stage_id: Annotated[str, typer.Argument(help="Stage ID")],
) -> None:
    """Generate a troubleshooting challenge for a stage."""
    settings = get_settings()
    tracker = get_tracker(settings)
    definition = _find_stage(tracker, stage_id)
    _require_unlocked(tracker, definition)
    title, prompt = _scenario_request(tracker, definition)
    asyncio.run(_ask_mentor(title, prompt, prompts.SCENARIO_FAILURE, settings))


# =============================================================================
# Interactive Menu
# =============================================================================

MENU_CHOICES = {
    "r": "roadmap",
    "s": "skills",
    "t": "toggle skill",
    "v": "view stage",
    "e": "expand/collapse stage extras",
    "g": "guide me (task)",
    "x": "troubleshooting scenario",
    "c": "capstone",
    "m": "close mentor panel",
    "reset": "reset progress",
    "q": "quit",
}


def _menu_stage(tracker: ProgressTracker) -> StageDefinition | None:
    stage_id = Prompt.ask("Stage ID", choices=[s.id for s in tracker.catalog])
    definition = tracker.catalog.get_stage(stage_id)
    if not tracker.is_stage_unlocked(definition):
        previous = tracker.catalog[definition.index - 1]
        console.print(
            views.render_locked_stage(
                definition, previous, engine.missing_skills(previous, tracker.inventory)
            )
        )
        return None
    return definition


async def _menu_loop(tracker: ProgressTracker, settings: Settings) -> None:
    logger.debug(f"Mentor config: {settings.get_mentor_config()}")
    async with GeminiClient.from_settings(settings) as client:
        tracker.mentor = MentorInteraction(client)
        _print_roadmap(tracker)

        while True:
            console.print(
                "  ".join(f"[{key}] {label}" for key, label in MENU_CHOICES.items()),
                style="dim",
                markup=False,
                highlight=False,
            )
            choice = Prompt.ask("pathfinder", choices=list(MENU_CHOICES), default="r", show_choices=False)

            if choice == "q":
                return
            if choice == "r":
                _print_roadmap(tracker)
            elif choice == "s":
                console.print(views.render_skills(tracker.catalog, tracker.inventory))
            elif choice == "t":
                skill_id = Prompt.ask("Skill ID", choices=list(tracker.catalog.skills), show_choices=False)
                held = tracker.toggle_skill(skill_id)
                console.print(f"{'☑' if held else '☐'} {tracker.catalog.skill_label(skill_id)}")
            elif choice in ("v", "e"):
                definition = _menu_stage(tracker)
                if definition is None:
                    continue
                if choice == "e":
                    tracker.toggle_resources(definition.id)
                console.print(
                    views.render_stage(
                        tracker.catalog,
                        definition,
                        tracker.status(definition),
                        tracker.inventory,
                        show_extras=definition.id in tracker.expanded_stages,
                    )
                )
            elif choice in ("g", "x"):
                definition = _menu_stage(tracker)
                if definition is None:
                    continue
                if choice == "g":
                    number = IntPrompt.ask("Task number", default=1)
                    try:
                        title, prompt = _task_request(definition, number)
                    except typer.Exit:
                        continue
                    failure = prompts.TASK_GUIDE_FAILURE
                else:
                    title, prompt = _scenario_request(tracker, definition)
                    failure = prompts.SCENARIO_FAILURE
                with console.status("[slate_blue1]Generating DevOps insights...[/]"):
                    await tracker.mentor.start(title, prompt, failure)
                panel = views.render_mentor(tracker.mentor.session)
                if panel is not None:
                    console.print(panel)
            elif choice == "c":
                last = tracker.catalog.last
                console.print(
                    views.render_capstone(
                        tracker.catalog.capstone,
                        tracker.capstone_unlocked,
                        last,
                        engine.missing_skills(last, tracker.inventory),
                    )
                )
            elif choice == "m":
                tracker.mentor.close()
            elif choice == "reset":
                done = tracker.reset(
                    lambda: typer.confirm(
                        "Are you sure you want to reset your progress? This cannot be undone."
                    )
                )
                console.print("[green]✓ Progress reset[/]" if done else "[yellow]Reset cancelled[/]")


@app.command()
def menu() -> None:
    """Start an interactive session."""
    settings = get_settings()
    tracker = get_tracker(settings)
    asyncio.run(_menu_loop(tracker, settings))


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Verbose output")
    ] = False,
) -> None:
    """
    🧭 Pathfinder - DevOps roadmap tracker with an AI mentor

    \b
    Quick Start:
      pathfinder skills             # List skills
      pathfinder toggle linux git   # Check off skills
      pathfinder roadmap            # See what unlocked
      pathfinder guide 1 2          # Ask the AI mentor
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/]")
        console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(1) from e
    configure_logging("DEBUG" if verbose else settings.log_level)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
