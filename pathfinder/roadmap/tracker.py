"""
Progress tracker: the learner's session state.

Owns the skill inventory (loaded once, saved after every change) together
with the UI-only state that a reset also clears: expanded stage extras and
the mentor panel.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from pathfinder.mentor.interaction import MentorInteraction

from . import engine
from .inventory import InventoryStore, LoadResult
from .models import StageCatalog, StageDefinition, StageStatus


class ProgressTracker:
    """Explicitly owned, injectable progress state for one learner."""

    def __init__(
        self,
        catalog: StageCatalog,
        store: InventoryStore,
        mentor: MentorInteraction | None = None,
    ):
        self.catalog = catalog
        self.store = store
        self.mentor = mentor

        self.load_result: LoadResult = store.load()
        if not self.load_result.ok:
            logger.warning(
                f"Ignoring unreadable progress file {store.path}: {self.load_result.error}"
            )
        self._skills: set[str] = set(self.load_result.unwrap_or_empty())

        self.expanded_stages: set[str] = set()

    # =========================================================================
    # Inventory
    # =========================================================================

    @property
    def inventory(self) -> frozenset[str]:
        return frozenset(self._skills)

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self._skills

    def toggle_skill(self, skill_id: str) -> bool:
        """
        Flip ``skill_id`` and persist the whole inventory.

        A failed write is logged by the store and does not undo the flip.

        Returns:
            Whether the skill is now held.
        """
        if skill_id in self._skills:
            self._skills.discard(skill_id)
            held = False
        else:
            self._skills.add(skill_id)
            held = True
        self.store.save(self.inventory)
        return held

    def reset(self, confirm: Callable[[], bool]) -> bool:
        """
        Clear all progress once ``confirm`` agrees.

        Returns:
            True if the reset happened.
        """
        if not confirm():
            return False

        self._skills.clear()
        self.store.clear()
        self.expanded_stages.clear()
        if self.mentor is not None:
            self.mentor.close()
        logger.info("Progress reset")
        return True

    # =========================================================================
    # Derived state
    # =========================================================================

    def status(self, stage: StageDefinition) -> StageStatus:
        return engine.stage_status(stage, self._skills, self.catalog)

    def overview(self) -> list[StageStatus]:
        return engine.roadmap_overview(self.catalog, self._skills)

    def is_stage_unlocked(self, stage: StageDefinition) -> bool:
        return engine.is_unlocked(stage.index, self.catalog, self._skills)

    @property
    def capstone_unlocked(self) -> bool:
        return engine.is_capstone_unlocked(self.catalog, self._skills)

    # =========================================================================
    # UI state
    # =========================================================================

    def toggle_resources(self, stage_id: str) -> bool:
        """Expand or collapse a stage's extras. Returns whether it is now expanded."""
        if stage_id in self.expanded_stages:
            self.expanded_stages.discard(stage_id)
            return False
        self.expanded_stages.add(stage_id)
        return True
