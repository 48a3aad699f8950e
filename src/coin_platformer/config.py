"""Configuration for the arcade platformer.

PhysicsConstants holds the per-tick tuning of the player's equations of motion.
GameConfig groups everything else the session needs: world size, scoring,
feedback effects (screen shake, particle bursts) and the player spawn point.

All values are per-tick quantities in pixels, matching a fixed-step loop at
the configured fps. Defaults give the classic arcade feel.
"""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Any


@dataclass
class PhysicsConstants:
    """Per-tick movement constants for the player."""

    gravity: float = 0.6  # Added to velocity_y every tick (px/tick^2), positive = down
    move_speed: float = 5.0  # Horizontal velocity added per tick while a direction is held
    friction: float = 0.85  # Multiplier applied to velocity_x every tick, input or not
    max_speed: float = 6.0  # |velocity_x| cap after friction
    jump_velocity: float = -20.0  # velocity_y set on an accepted jump (negative = up)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            "gravity": self.gravity,
            "move_speed": self.move_speed,
            "friction": self.friction,
            "max_speed": self.max_speed,
            "jump_velocity": self.jump_velocity,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> "PhysicsConstants":
        """Create from dictionary, falling back to defaults for missing keys."""
        return cls(
            gravity=d.get("gravity", 0.6),
            move_speed=d.get("move_speed", 5.0),
            friction=d.get("friction", 0.85),
            max_speed=d.get("max_speed", 6.0),
            jump_velocity=d.get("jump_velocity", -20.0),
        )


@dataclass
class GameConfig:
    """Complete game configuration."""
    physics: PhysicsConstants = field(default_factory=PhysicsConstants)

    # World bounds. x is clamped to the width; falling past the height kills.
    world_width: int = 800
    world_height: int = 600
    fps: int = 60

    # Player body
    player_width: float = 40.0
    player_height: float = 60.0
    player_start: Tuple[float, float] = (50.0, 300.0)

    # Session rules
    starting_lives: int = 3
    first_level: int = 1
    coin_value: int = 100

    # Feedback effects
    coin_shake: float = 3.0
    death_shake: float = 10.0
    shake_decay: float = 0.9  # screen_shake *= shake_decay each tick
    coin_particles: int = 10
    death_particles: int = 20
    jump_particles: int = 5

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "physics": self.physics.to_dict(),
            "world_width": self.world_width,
            "world_height": self.world_height,
            "fps": self.fps,
            "player_width": self.player_width,
            "player_height": self.player_height,
            "player_start": list(self.player_start),
            "starting_lives": self.starting_lives,
            "first_level": self.first_level,
            "coin_value": self.coin_value,
            "coin_shake": self.coin_shake,
            "death_shake": self.death_shake,
            "shake_decay": self.shake_decay,
            "coin_particles": self.coin_particles,
            "death_particles": self.death_particles,
            "jump_particles": self.jump_particles,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Create from dictionary (inverse of to_dict). Missing keys use defaults."""
        defaults = cls()
        kwargs = {
            key: d[key]
            for key in defaults.to_dict()
            if key in d and key not in ("physics", "player_start")
        }
        if "player_start" in d:
            kwargs["player_start"] = tuple(d["player_start"])
        return cls(physics=PhysicsConstants.from_dict(d.get("physics", {})), **kwargs)
