"""Level templates and the level library.

A LevelTemplate is immutable reference data. Sessions never play on a
template directly: instantiate() hands out deep copies of its entity lists,
so coin flags and enemy positions changed during play leave the template
replayable.

Levels are keyed by number, starting at 1 and contiguous. Looking up a
number with no entry returns None, which the session treats as "the last
level has been beaten".

JSON layout (as written by LevelLibrary.save)::

    {"version": 1, "levels": {"1": {"name": ..., "background": ...,
        "platforms": [{"x", "y", "width", "height", "color"?, "type"?}],
        "collectibles": [{"x", "y", "width"?, "height"?, "color"?, "active"?, "type"?}],
        "enemies": [{"x", "y", "width"?, "height"?, "color"?, "speed_x", "range", "start_x"?}]}}}

Enemy fields also accept the camelCase spellings speedX and startX. Numeric
fields must be JSON numbers and active must be a boolean; anything else is
rejected with LevelFormatError when the file is loaded.
"""

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union

from .entities import Platform, Collectible, Enemy


class LevelFormatError(ValueError):
    """Raised when level data cannot be turned into templates."""


_MISSING = object()


class _EntityReader:
    """Typed field access for one entity record of a level file."""

    def __init__(self, number: int, kind: str, index: int, record: Any):
        self.where = f"Level {number}: {kind}[{index}]"
        if not isinstance(record, dict):
            raise LevelFormatError(f"{self.where}: expected an object, got {type(record).__name__}")
        self.record = record

    def _raw(self, names: Tuple[str, ...], default: Any) -> Any:
        for name in names:
            if name in self.record:
                return self.record[name]
        if default is _MISSING:
            raise LevelFormatError(f"{self.where}: missing field '{names[0]}'")
        return default

    def number(self, *names: str, default: Any = _MISSING) -> float:
        value = self._raw(names, default)
        # bool is an int subclass but never a valid coordinate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise LevelFormatError(f"{self.where}: field '{names[0]}' must be a number, got {value!r}")
        return value

    def flag(self, name: str, default: bool) -> bool:
        value = self._raw((name,), default)
        if not isinstance(value, bool):
            raise LevelFormatError(f"{self.where}: field '{name}' must be true or false, got {value!r}")
        return value

    def text(self, name: str, default: str) -> str:
        value = self._raw((name,), default)
        if not isinstance(value, str):
            raise LevelFormatError(f"{self.where}: field '{name}' must be a string, got {value!r}")
        return value


def _records(number: int, d: Dict[str, Any], kind: str) -> List[Any]:
    records = d.get(kind, [])
    if not isinstance(records, list):
        raise LevelFormatError(f"Level {number}: '{kind}' must be a list")
    return records


def _read_platform(r: _EntityReader) -> Platform:
    return Platform(
        x=r.number("x"), y=r.number("y"),
        width=r.number("width"), height=r.number("height"),
        color=r.text("color", "#795548"), type=r.text("type", "solid"),
    )


def _read_collectible(r: _EntityReader) -> Collectible:
    return Collectible(
        x=r.number("x"), y=r.number("y"),
        width=r.number("width", default=20), height=r.number("height", default=20),
        color=r.text("color", "#FFD700"), active=r.flag("active", True),
        type=r.text("type", "coin"),
    )


def _read_enemy(r: _EntityReader) -> Enemy:
    x = r.number("x")
    return Enemy(
        x=x, y=r.number("y"),
        width=r.number("width", default=30), height=r.number("height", default=30),
        color=r.text("color", "#F44336"),
        speed_x=r.number("speed_x", "speedX"),
        range=r.number("range"),
        start_x=r.number("start_x", "startX", default=x),
    )


@dataclass(frozen=True)
class LevelTemplate:
    """Hand-authored level layout.

    The template deep-copies the entities it is given, so later changes to
    the caller's objects do not reach it. The entity objects it holds are
    ordinary mutable records; treat them as read-only and mutate only the
    copies returned by instantiate().
    """
    number: int
    name: str
    platforms: Tuple[Platform, ...]
    collectibles: Tuple[Collectible, ...]
    enemies: Tuple[Enemy, ...]
    background: str = "#87CEEB"

    def __post_init__(self):
        for name in ("platforms", "collectibles", "enemies"):
            object.__setattr__(self, name, tuple(copy.deepcopy(list(getattr(self, name)))))

    def instantiate(self) -> Tuple[List[Platform], List[Collectible], List[Enemy]]:
        """Deep-copy the entity lists into fresh working lists for a session."""
        return (
            copy.deepcopy(list(self.platforms)),
            copy.deepcopy(list(self.collectibles)),
            copy.deepcopy(list(self.enemies)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "platforms": [p.to_dict() for p in self.platforms],
            "collectibles": [c.to_dict() for c in self.collectibles],
            "enemies": [e.to_dict() for e in self.enemies],
            "background": self.background,
        }

    @classmethod
    def from_dict(cls, number: int, d: Dict[str, Any]) -> "LevelTemplate":
        """Build a template from its JSON form.

        Raises:
            LevelFormatError: if a required field is missing, or a field has
                the wrong type. The message names the level and the field.
        """
        if not isinstance(d, dict):
            raise LevelFormatError(f"Level {number}: expected an object, got {type(d).__name__}")

        platforms = tuple(
            _read_platform(_EntityReader(number, "platforms", i, p))
            for i, p in enumerate(_records(number, d, "platforms"))
        )
        collectibles = tuple(
            _read_collectible(_EntityReader(number, "collectibles", i, c))
            for i, c in enumerate(_records(number, d, "collectibles"))
        )
        enemies = tuple(
            _read_enemy(_EntityReader(number, "enemies", i, e))
            for i, e in enumerate(_records(number, d, "enemies"))
        )

        name = d.get("name", f"Level {number}")
        background = d.get("background", "#87CEEB")
        for field_name, value in (("name", name), ("background", background)):
            if not isinstance(value, str):
                raise LevelFormatError(f"Level {number}: '{field_name}' must be a string, got {value!r}")

        return cls(
            number=number,
            name=name,
            platforms=platforms,
            collectibles=collectibles,
            enemies=enemies,
            background=background,
        )


class LevelLibrary:
    """Lookup of level templates by number."""

    def __init__(self, templates: Optional[Dict[int, LevelTemplate]] = None):
        self._templates: Dict[int, LevelTemplate] = dict(templates or {})

    def get(self, number: int) -> Optional[LevelTemplate]:
        """Template for a level number, or None past the last level."""
        return self._templates.get(number)

    def __contains__(self, number: int) -> bool:
        return number in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def numbers(self) -> List[int]:
        return sorted(self._templates)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": 1,
            "levels": {str(n): t.to_dict() for n, t in sorted(self._templates.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelLibrary":
        """Build from the JSON layout written by to_dict().

        Raises:
            LevelFormatError: if the level table is missing, keys are not
                integers, or numbering does not run contiguously from 1.
        """
        levels = data.get("levels") if isinstance(data, dict) else None
        if not isinstance(levels, dict):
            raise LevelFormatError("Expected a 'levels' table")

        templates = {}
        for key, level in levels.items():
            try:
                number = int(key)
            except ValueError as exc:
                raise LevelFormatError(f"Level key {key!r} is not an integer") from exc
            templates[number] = LevelTemplate.from_dict(number, level)

        if sorted(templates) != list(range(1, len(templates) + 1)):
            raise LevelFormatError(
                f"Level numbers must run contiguously from 1, got {sorted(templates)}"
            )
        return cls(templates)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "LevelLibrary":
        """Load levels from a JSON file."""
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise LevelFormatError(f"{path}: {exc}") from exc
        return cls.from_dict(data)

    def save(self, path: Union[str, Path]) -> None:
        """Write all levels to a JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


def _coin(x: float, y: float) -> Collectible:
    return Collectible(x=x, y=y, width=20, height=20)


def _enemy(x: float, y: float, speed_x: float, patrol_range: float) -> Enemy:
    return Enemy(x=x, y=y, width=30, height=30, speed_x=speed_x, range=patrol_range, start_x=x)


LEVELS: Dict[int, LevelTemplate] = {
    1: LevelTemplate(
        number=1,
        name="The Beginning",
        platforms=(
            Platform(0, 550, 800, 50, color="#4CAF50"),
            Platform(300, 400, 200, 20, color="#795548"),
            Platform(100, 300, 200, 20, color="#795548"),
            Platform(500, 200, 200, 20, color="#795548"),
        ),
        collectibles=(_coin(350, 350), _coin(150, 250), _coin(550, 150)),
        enemies=(_enemy(400, 360, 0.8, 100), _enemy(200, 260, 0.8, 100)),
        background="#87CEEB",
    ),
    2: LevelTemplate(
        number=2,
        name="The Challenge",
        platforms=(
            Platform(0, 550, 800, 50, color="#673AB7"),
            Platform(100, 450, 100, 20, color="#4527A0"),
            Platform(300, 400, 100, 20, color="#4527A0"),
            Platform(500, 350, 100, 20, color="#4527A0"),
            Platform(700, 300, 100, 20, color="#4527A0"),
            Platform(500, 200, 100, 20, color="#4527A0"),
            Platform(300, 150, 100, 20, color="#4527A0"),
            Platform(100, 200, 100, 20, color="#4527A0"),
        ),
        collectibles=(
            _coin(140, 400), _coin(340, 350), _coin(540, 300), _coin(740, 250), _coin(540, 150),
        ),
        enemies=(_enemy(200, 410, 3, 150), _enemy(400, 360, 3, 150), _enemy(600, 310, 3, 150)),
        background="#3F51B5",
    ),
}


def default_library() -> LevelLibrary:
    """Library holding the built-in levels."""
    return LevelLibrary(LEVELS)
