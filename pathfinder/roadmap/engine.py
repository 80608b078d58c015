"""
Progress-gated stage engine.

Turns the learner's skill inventory into per-stage completion percentages,
sequential unlock decisions and the capstone gate. Everything here is a pure
function of (catalog, inventory) and is recomputed on every read.

Gating rules:
- The first stage is always unlocked.
- Stage i unlocks once stage i-1 is at exactly 100%.
- The capstone unlocks once the *last* stage is at 100%. Intermediate stages
  are not re-checked.
"""

from __future__ import annotations

from collections.abc import Collection

from .models import StageCatalog, StageDefinition, StageStatus

COMPLETE = 100


def completion_percent(stage: StageDefinition, inventory: Collection[str]) -> int:
    """
    Percentage of a stage's required skills present in the inventory.

    Rounds half up, so 1 of 8 skills is 13%.
    """
    total = len(stage.required_skills)
    held = sum(1 for skill in stage.required_skills if skill in inventory)
    # round(100 * held / total) with halves rounded up, in integer arithmetic
    return (200 * held + total) // (2 * total)


def is_unlocked(stage_index: int, catalog: StageCatalog, inventory: Collection[str]) -> bool:
    """
    Whether the stage at ``stage_index`` is open.

    Only the immediate predecessor is evaluated, so this is safe to call for
    any index on its own.

    Raises:
        IndexError: If ``stage_index`` is outside the catalog.
    """
    if stage_index < 0 or stage_index >= len(catalog):
        raise IndexError(f"Stage index {stage_index} out of range (0..{len(catalog) - 1})")
    if stage_index == 0:
        return True
    return completion_percent(catalog[stage_index - 1], inventory) == COMPLETE


def stage_status(
    stage: StageDefinition,
    inventory: Collection[str],
    catalog: StageCatalog | None = None,
) -> StageStatus:
    """
    Derive the status of one stage.

    Without a catalog the stage is judged on its own and reported unlocked
    only if it is the first stage.
    """
    percent = completion_percent(stage, inventory)
    if catalog is None:
        unlocked = stage.index == 0
    else:
        unlocked = is_unlocked(stage.index, catalog, inventory)
    return StageStatus(stage_id=stage.id, completion_percent=percent, unlocked=unlocked)


def is_capstone_unlocked(catalog: StageCatalog, inventory: Collection[str]) -> bool:
    """Whether the capstone is open: the last stage's own requirements are met."""
    return completion_percent(catalog.last, inventory) == COMPLETE


def roadmap_overview(catalog: StageCatalog, inventory: Collection[str]) -> list[StageStatus]:
    """Status of every stage, in catalog order."""
    return [stage_status(stage, inventory, catalog) for stage in catalog]


def missing_skills(stage: StageDefinition, inventory: Collection[str]) -> list[str]:
    """Required skills of ``stage`` not yet in the inventory, sorted."""
    return sorted(skill for skill in stage.required_skills if skill not in inventory)
