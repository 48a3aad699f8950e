"""coin-platformer: 2D arcade platformer with a frame-stepped physics core.

The player runs and jumps across hand-authored levels, collecting every coin
while avoiding patrolling enemies. The simulation core (physics, collisions,
session state, particles) is display-free; a pygame frontend renders it and
feeds it keyboard input.
"""

from .config import PhysicsConstants, GameConfig
from .entities import Player, Platform, Collectible, Enemy, check_collision
from .particles import Particle
from .levels import LevelTemplate, LevelLibrary, LevelFormatError, LEVELS, default_library
from .physics import PhysicsWorld, CollisionEvents
from .input import InputMapper, KeyState, Action
from .events import GameListener, AudioSink, NullAudio
from .session import GameSession, GameState

__all__ = [
    "PhysicsConstants",
    "GameConfig",
    "Player",
    "Platform",
    "Collectible",
    "Enemy",
    "check_collision",
    "Particle",
    "LevelTemplate",
    "LevelLibrary",
    "LevelFormatError",
    "LEVELS",
    "default_library",
    "PhysicsWorld",
    "CollisionEvents",
    "InputMapper",
    "KeyState",
    "Action",
    "GameListener",
    "AudioSink",
    "NullAudio",
    "GameSession",
    "GameState",
]
