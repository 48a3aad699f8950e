"""Particle effects: short-lived ballistic sparks that fade out.

Particles are spawned in bursts by gameplay events (jump dust, coin sparkle,
death burst) and removed once their life runs out.
"""

import random
from dataclasses import dataclass
from typing import List, Optional


PARTICLE_GRAVITY = 0.5


@dataclass
class Particle:
    """A single spark. life starts at 1.0 and falls by decay every tick."""
    x: float
    y: float
    color: str
    size: float
    speed_x: float
    speed_y: float
    decay: float
    gravity: float = PARTICLE_GRAVITY
    life: float = 1.0

    @classmethod
    def spawn(cls, x: float, y: float, color: str, rng: Optional[random.Random] = None) -> "Particle":
        """Create a particle with random size, heading and decay rate."""
        rng = rng or random
        return cls(
            x=x,
            y=y,
            color=color,
            size=rng.random() * 5 + 2,
            speed_x=(rng.random() - 0.5) * 8,
            speed_y=(rng.random() - 0.5) * 8,
            decay=rng.random() * 0.02 + 0.02,
        )

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self) -> None:
        self.x += self.speed_x
        self.y += self.speed_y
        self.speed_y += self.gravity
        self.life -= self.decay


def burst(x: float, y: float, color: str, count: int,
          rng: Optional[random.Random] = None) -> List[Particle]:
    """Spawn count particles at (x, y)."""
    return [Particle.spawn(x, y, color, rng) for _ in range(count)]


def update_particles(particles: List[Particle]) -> List[Particle]:
    """Advance every particle one tick and return the survivors."""
    survivors = []
    for particle in particles:
        particle.update()
        if particle.alive:
            survivors.append(particle)
    return survivors
