"""
Roadmap: stage catalog, progress engine and learner state.

Modules:
- catalog: YAML roadmap loader and validation
- engine: completion percentages, stage unlocks, capstone gate
- inventory: skill inventory persistence
- tracker: the learner's session state
"""
from .catalog import CatalogError, load_catalog
from .engine import (
    completion_percent,
    is_capstone_unlocked,
    is_unlocked,
    roadmap_overview,
    stage_status,
)
from .inventory import InventoryStore, LoadResult
from .models import StageCatalog, StageDefinition, StageStatus
from .tracker import ProgressTracker

__all__ = [
    "CatalogError",
    "load_catalog",
    "completion_percent",
    "is_capstone_unlocked",
    "is_unlocked",
    "roadmap_overview",
    "stage_status",
    "InventoryStore",
    "LoadResult",
    "StageCatalog",
    "StageDefinition",
    "StageStatus",
    "ProgressTracker",
]
