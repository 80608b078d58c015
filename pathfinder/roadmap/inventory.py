"""
Skill inventory persistence.

The inventory (the set of checked-off skills) is stored as a JSON object
mapping skill id to ``true`` in ~/.pathfinder/progress.json.

Loading never fails: a missing file is an empty inventory, and a corrupt file
is reported through ``LoadResult.error`` so callers can log it before
falling back to the empty set. Saving is best-effort; write errors are
logged and swallowed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

DEFAULT_PROGRESS_FILE = Path.home() / ".pathfinder" / "progress.json"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading the stored inventory."""

    skills: frozenset[str] = frozenset()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or_empty(self) -> frozenset[str]:
        """The loaded skills, or the empty set if loading failed."""
        return self.skills if self.ok else frozenset()


def _decode(data: object) -> frozenset[str]:
    """Decode the stored payload. Raises ValueError on an unknown shape."""
    if isinstance(data, dict):
        return frozenset(str(skill) for skill, held in data.items() if held is True)
    # Older files may hold a plain list of skill ids
    if isinstance(data, list) and all(isinstance(item, str) for item in data):
        return frozenset(data)
    raise ValueError(f"unexpected progress payload of type {type(data).__name__}")


class InventoryStore:
    """
    Reads and writes the skill inventory file.

    The store holds no state besides its path, so several stores pointing at
    the same file simply see last-write-wins.
    """

    def __init__(self, path: Path | None = None):
        self.path = path or DEFAULT_PROGRESS_FILE

    def load(self) -> LoadResult:
        """Read the stored inventory."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return LoadResult(skills=_decode(data))
        except FileNotFoundError:
            return LoadResult()
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            return LoadResult(error=f"{type(e).__name__}: {e}")

    def save(self, skills: frozenset[str] | set[str]) -> bool:
        """
        Write the full inventory.

        Returns:
            True if the file was written, False if the write failed.
        """
        payload = {skill: True for skill in sorted(skills)}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save progress to {self.path}: {e}")
            return False
        return True

    def clear(self) -> bool:
        """Persist the empty inventory."""
        return self.save(frozenset())
