"""Game entities: Player, platforms, collectibles, enemies.

Entities are plain rectangles with a top-left origin and y growing downward.
Level templates own the pristine copies; a session works on deep copies.
"""

from dataclasses import dataclass
from typing import Tuple, Dict, Any


COLOR_PLAYER = "#FF5722"
COLOR_COIN = "#FFD700"
COLOR_ENEMY = "#F44336"


def check_collision(a, b) -> bool:
    """Strict AABB overlap test. Touching edges do not count as overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


@dataclass
class Rect:
    """Axis-aligned rectangle with a top-left origin."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        """Center point (x, y)."""
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounds as (left, top, right, bottom)."""
        return self.x, self.y, self.x + self.width, self.y + self.height

    def overlaps(self, other) -> bool:
        return check_collision(self, other)


@dataclass
class Player(Rect):
    """The single dynamic body.

    Mutated by the physics world every tick and reset in place on death
    or level load.
    """
    x: float = 50.0
    y: float = 300.0
    width: float = 40.0
    height: float = 60.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    is_jumping: bool = False
    is_on_ground: bool = False
    direction: int = 1  # -1 facing left, +1 facing right
    color: str = COLOR_PLAYER
    spawn_x: float = 50.0
    spawn_y: float = 300.0

    @classmethod
    def at_spawn(cls, spawn: Tuple[float, float], width: float = 40.0, height: float = 60.0) -> "Player":
        """Create a player standing at its spawn point."""
        return cls(x=spawn[0], y=spawn[1], width=width, height=height,
                   spawn_x=spawn[0], spawn_y=spawn[1])

    @property
    def velocity(self) -> Tuple[float, float]:
        """Current velocity (vx, vy)."""
        return self.velocity_x, self.velocity_y

    @property
    def bottom_center(self) -> Tuple[float, float]:
        """Point under the player's feet, where jump dust is spawned."""
        return self.x + self.width / 2, self.y + self.height

    def reset(self) -> None:
        """Return to the spawn point at rest. Facing direction is kept."""
        self.x = self.spawn_x
        self.y = self.spawn_y
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self.is_jumping = False
        self.is_on_ground = False


@dataclass
class Platform(Rect):
    """Static solid platform. Never moves once a level is loaded."""
    color: str = "#795548"
    type: str = "solid"

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height,
                "color": self.color, "type": self.type}


@dataclass
class Collectible(Rect):
    """Coin that can be picked up once.

    Collected coins stay in the level's list with active=False so that
    they are skipped by collision checks and rendering.
    """
    color: str = COLOR_COIN
    active: bool = True
    type: str = "coin"

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height,
                "color": self.color, "active": self.active, "type": self.type}


@dataclass
class Enemy(Rect):
    """Patrolling enemy oscillating around start_x.

    Enemies only move horizontally and are never destroyed.
    """
    color: str = COLOR_ENEMY
    speed_x: float = 0.8
    range: float = 100.0
    start_x: float = 0.0

    def patrol(self) -> None:
        """Advance one tick. Turns around once past start_x +/- range.

        The flip happens on the tick after the boundary is crossed, so an
        enemy may overshoot by one tick's displacement.
        """
        self.x += self.speed_x
        if abs(self.x - self.start_x) > self.range:
            self.speed_x = -self.speed_x

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height,
                "color": self.color, "speed_x": self.speed_x, "range": self.range,
                "start_x": self.start_x}
