"""Data models for the DevOps roadmap."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Skill:
    """An atomic competency the learner can check off."""

    id: str
    label: str
    category: str = ""


@dataclass(frozen=True)
class SkillCategory:
    """A titled group of skills shown together in the checklist."""

    id: str
    title: str
    skills: tuple[Skill, ...] = ()


@dataclass(frozen=True)
class ProjectTask:
    """One hands-on task of a stage project."""

    topic: str
    task: str


@dataclass(frozen=True)
class Resource:
    """External learning resource link."""

    name: str
    url: str


@dataclass(frozen=True)
class CheatSheetEntry:
    """A command worth remembering, with a short description."""

    cmd: str
    desc: str


@dataclass(frozen=True)
class StageProject:
    """Milestone project attached to a stage."""

    title: str
    goal: str
    tasks: tuple[ProjectTask, ...] = ()
    resources: tuple[Resource, ...] = ()
    hints: tuple[str, ...] = ()
    cheat_sheet: tuple[CheatSheetEntry, ...] = ()
    guide: tuple[str, ...] = ()


@dataclass(frozen=True)
class StageDefinition:
    """
    One sequential curriculum unit gated by prerequisite skills.

    ``index`` is the stage's position in the catalog; ``required_skills``
    is never empty once the catalog has been validated.
    """

    id: str
    index: int
    title: str
    required_skills: frozenset[str]
    description: str = ""
    color: str = "blue"
    project: StageProject | None = None


@dataclass(frozen=True)
class CapstoneBrief:
    """The culminating project shown once the capstone gate opens."""

    title: str
    subtitle: str = ""
    summary: str = ""
    architecture: tuple[str, ...] = ()
    operations: tuple[str, ...] = ()
    evaluation: tuple[str, ...] = ()


@dataclass(frozen=True)
class StageStatus:
    """Derived progress of a stage. Never stored."""

    stage_id: str
    completion_percent: int
    unlocked: bool

    @property
    def is_complete(self) -> bool:
        return self.completion_percent == 100


@dataclass(frozen=True)
class StageCatalog:
    """Ordered stages plus the skill checklist and capstone brief."""

    stages: tuple[StageDefinition, ...]
    categories: tuple[SkillCategory, ...] = ()
    capstone: CapstoneBrief | None = None

    def __len__(self) -> int:
        return len(self.stages)

    def __getitem__(self, index: int) -> StageDefinition:
        return self.stages[index]

    def __iter__(self):
        return iter(self.stages)

    @property
    def last(self) -> StageDefinition:
        return self.stages[-1]

    @property
    def skills(self) -> dict[str, Skill]:
        """All known skills keyed by id, in checklist order."""
        return {skill.id: skill for category in self.categories for skill in category.skills}

    def get_stage(self, stage_id: str) -> StageDefinition:
        """Look up a stage by id."""
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        raise KeyError(stage_id)

    def skill_label(self, skill_id: str) -> str:
        skill = self.skills.get(skill_id)
        return skill.label if skill else skill_id

    def stage_skills(self, stage: StageDefinition) -> list[Skill]:
        """Required skills of a stage, in checklist order."""
        ordered = [skill for skill in self.skills.values() if skill.id in stage.required_skills]
        known = {skill.id for skill in ordered}
        ordered.extend(Skill(id=sid, label=sid) for sid in sorted(stage.required_skills - known))
        return ordered
