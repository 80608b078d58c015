"""
Stage catalog loader.

Reads the roadmap (skill checklist, ordered stages, capstone brief) from a
YAML file and validates it once. A malformed catalog is a configuration
error: it fails here at load time so that progress queries never have to
guard against it.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from .models import (
    CapstoneBrief,
    CheatSheetEntry,
    ProjectTask,
    Resource,
    Skill,
    SkillCategory,
    StageCatalog,
    StageDefinition,
    StageProject,
)

DATA_PACKAGE = "pathfinder.data"
DEFAULT_CATALOG = "roadmap.yaml"


class CatalogError(Exception):
    """Raised when the roadmap catalog is missing or malformed."""


# =============================================================================
# Parsing
# =============================================================================


def _category_from_dict(raw: dict[str, Any]) -> SkillCategory:
    category_id = str(raw["id"])
    skills = tuple(
        Skill(id=str(item["id"]), label=str(item.get("label", item["id"])), category=category_id)
        for item in raw.get("skills") or []
    )
    return SkillCategory(id=category_id, title=str(raw.get("title", category_id)), skills=skills)


def _project_from_dict(raw: dict[str, Any] | None) -> StageProject | None:
    if not raw:
        return None
    return StageProject(
        title=str(raw.get("title", "")),
        goal=str(raw.get("goal", "")),
        tasks=tuple(
            ProjectTask(topic=str(item.get("topic", "")), task=str(item["task"]))
            for item in raw.get("tasks") or []
        ),
        resources=tuple(
            Resource(name=str(item["name"]), url=str(item.get("url", "")))
            for item in raw.get("resources") or []
        ),
        hints=tuple(str(hint) for hint in raw.get("hints") or []),
        cheat_sheet=tuple(
            CheatSheetEntry(cmd=str(item["cmd"]), desc=str(item.get("desc", "")))
            for item in raw.get("cheat_sheet") or []
        ),
        guide=tuple(str(step) for step in raw.get("guide") or []),
    )


def _stage_from_dict(index: int, raw: dict[str, Any]) -> StageDefinition:
    stage_id = str(raw["id"])
    required = frozenset(str(skill) for skill in raw.get("requires") or [])
    if not required:
        raise CatalogError(f"Stage '{stage_id}' has no required skills.")

    return StageDefinition(
        id=stage_id,
        index=index,
        title=str(raw.get("title", stage_id)),
        required_skills=required,
        description=str(raw.get("description", "")),
        color=str(raw.get("color", "blue")),
        project=_project_from_dict(raw.get("project")),
    )


def _capstone_from_dict(raw: dict[str, Any] | None) -> CapstoneBrief | None:
    if not raw:
        return None
    return CapstoneBrief(
        title=str(raw.get("title", "Capstone")),
        subtitle=str(raw.get("subtitle", "")),
        summary=str(raw.get("summary", "")),
        architecture=tuple(str(item) for item in raw.get("architecture") or []),
        operations=tuple(str(item) for item in raw.get("operations") or []),
        evaluation=tuple(str(item) for item in raw.get("evaluation") or []),
    )


def catalog_from_dict(raw: dict[str, Any]) -> StageCatalog:
    """
    Build and validate a catalog from already-parsed data.

    Raises:
        CatalogError: If the structure is invalid.
    """
    if not isinstance(raw, dict):
        raise CatalogError("Roadmap must be a mapping with 'stages'.")

    try:
        categories = tuple(_category_from_dict(item) for item in raw.get("skill_categories") or [])
        stages = tuple(
            _stage_from_dict(index, item) for index, item in enumerate(raw.get("stages") or [])
        )
        capstone = _capstone_from_dict(raw.get("capstone"))
    except (KeyError, TypeError, AttributeError) as e:
        raise CatalogError(f"Malformed roadmap entry: {e!r}") from e

    catalog = StageCatalog(stages=stages, categories=categories, capstone=capstone)
    _validate(catalog)
    return catalog


def _validate(catalog: StageCatalog) -> None:
    """Validate ids are unique and stage requirements reference known skills."""
    if not catalog.stages:
        raise CatalogError("Roadmap defines no stages.")

    seen_skills: set[str] = set()
    for category in catalog.categories:
        for skill in category.skills:
            if skill.id in seen_skills:
                raise CatalogError(f"Duplicate skill id: {skill.id}")
            seen_skills.add(skill.id)

    seen_stages: set[str] = set()
    for stage in catalog.stages:
        if stage.id in seen_stages:
            raise CatalogError(f"Duplicate stage id: {stage.id}")
        seen_stages.add(stage.id)

        # A catalog without a checklist accepts any skill id
        if seen_skills:
            unknown = sorted(stage.required_skills - seen_skills)
            if unknown:
                raise CatalogError(
                    f"Stage '{stage.id}' requires unknown skills: {', '.join(unknown)}"
                )


# =============================================================================
# Loading
# =============================================================================


def load_catalog(path: Path | str | None = None) -> StageCatalog:
    """
    Load the roadmap catalog.

    Args:
        path: YAML file to read. Defaults to the bundled roadmap.

    Raises:
        CatalogError: If the file cannot be read or is invalid.
    """
    try:
        if path is None:
            text = resources.files(DATA_PACKAGE).joinpath(DEFAULT_CATALOG).read_text(encoding="utf-8")
            source = f"{DATA_PACKAGE}/{DEFAULT_CATALOG}"
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)
        raw = yaml.safe_load(text)
    except OSError as e:
        raise CatalogError(f"Cannot read roadmap: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Roadmap is not valid YAML: {e}") from e

    catalog = catalog_from_dict(raw)
    logger.debug(f"Loaded {len(catalog)} stages from {source}")
    return catalog
