"""Game session: the authoritative per-session state and its state machine.

A GameSession owns score, lives, the current level's working entity lists,
the player, particles and screen shake. It sequences each tick (physics,
event handling, particle maintenance, win check) and reacts to the events
physics raises.

States:
    IDLE -> PLAYING -> (PAUSED <-> PLAYING) -> LEVEL_COMPLETE
        -> PLAYING (next level) or GAME_OVER (completed=True)
    PLAYING -> GAME_OVER (completed=False) when lives run out

GAME_OVER is terminal until start() is called again.
"""

import logging
import random
from enum import Enum
from typing import Optional, List, Dict, Any

from .config import GameConfig
from .entities import Player, Platform, Collectible, Enemy
from .events import GameListener, AudioSink, NullAudio, SOUND_JUMP, SOUND_COLLECT, SOUND_DEATH
from .input import InputMapper, KeyState, Action
from .levels import LevelLibrary, LevelTemplate, default_library
from .particles import Particle, burst, update_particles
from .physics import PhysicsWorld, CollisionEvents

logger = logging.getLogger(__name__)

COLOR_JUMP_DUST = "#FFFFFF"


class GameState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


class GameSession(CollisionEvents):
    """Single owner of all mutable game state for one play session."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        levels: Optional[LevelLibrary] = None,
        listener: Optional[GameListener] = None,
        audio: Optional[AudioSink] = None,
        rng: Optional[random.Random] = None,
    ):
        """Create an idle session.

        Args:
            config: Game configuration. Uses defaults if None.
            levels: Level templates. Uses the built-in levels if None.
            listener: Presentation observer. Defaults to a no-op listener.
            audio: Sound cue sink. Defaults to silence.
            rng: Random source for particle effects.
        """
        self.config = config or GameConfig()
        self.levels = levels if levels is not None else default_library()
        self.listener = listener or GameListener()
        self.audio = audio or NullAudio()
        self.rng = rng or random.Random()

        self.physics = PhysicsWorld.from_config(self.config)

        self.state = GameState.IDLE
        self.completed: Optional[bool] = None
        self.score = 0
        self.lives = self.config.starting_lives
        self.current_level = self.config.first_level
        self.screen_shake = 0.0
        self.tick_count = 0

        self.player = Player.at_spawn(
            self.config.player_start, self.config.player_width, self.config.player_height
        )
        self.platforms: List[Platform] = []
        self.collectibles: List[Collectible] = []
        self.enemies: List[Enemy] = []
        self.particles: List[Particle] = []

        self._keys = KeyState()

    # --- state queries ---

    @property
    def is_playing(self) -> bool:
        return self.state in (GameState.PLAYING, GameState.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self.state == GameState.PAUSED

    def current_template(self) -> Optional[LevelTemplate]:
        return self.levels.get(self.current_level)

    def active_collectible_count(self) -> int:
        return sum(1 for coin in self.collectibles if coin.active)

    # --- lifecycle ---

    def start(self) -> None:
        """Begin a new game from the first level. No-op while already playing."""
        if self.is_playing:
            return

        self.score = 0
        self.lives = self.config.starting_lives
        self.current_level = self.config.first_level
        self.particles = []
        self.screen_shake = 0.0
        self.tick_count = 0
        self.completed = None
        self._notify_hud()
        self.listener.on_menus_hidden()

        if not self.load_level(self.current_level):
            # An empty library has nothing to play.
            self._end_game(completed=True)
            return
        self.state = GameState.PLAYING

    def load_level(self, number: int) -> bool:
        """Copy a level template into the working lists and reset the player.

        Returns:
            False if no level has this number.
        """
        template = self.levels.get(number)
        if template is None:
            return False

        self.platforms, self.collectibles, self.enemies = template.instantiate()
        self.player.reset()
        logger.info("Loaded level %d (%s)", number, template.name)
        return True

    def tick(self, dt: Optional[float] = None) -> None:
        """Advance one frame. No-op unless playing and not paused.

        Args:
            dt: Frame time in seconds. Accepted for loop compatibility; the
                simulation is fixed-step and does not scale by it.
        """
        if self.state != GameState.PLAYING:
            return

        self.tick_count += 1
        self.screen_shake *= self.config.shake_decay

        self.physics.step(
            self.player, self._keys, self.platforms, self.collectibles, self.enemies, self
        )
        self.particles = update_particles(self.particles)

        if self.state == GameState.PLAYING:
            self.check_level_complete()

    def check_level_complete(self) -> None:
        if self.active_collectible_count() == 0:
            self.on_level_complete()

    def advance_to_next_level(self) -> None:
        """Move on from a completed level, or finish the game after the last one."""
        if self.state != GameState.LEVEL_COMPLETE:
            return

        self.current_level += 1
        if self.load_level(self.current_level):
            self.state = GameState.PLAYING
            self._notify_hud()
            self.listener.on_menus_hidden()
        else:
            self._end_game(completed=True)

    def toggle_pause(self) -> None:
        if not self.is_playing:
            return
        self.state = GameState.PLAYING if self.is_paused else GameState.PAUSED
        self.listener.on_pause(self.is_paused)

    def resume(self) -> None:
        if not self.is_playing:
            return
        self.state = GameState.PLAYING
        self.listener.on_pause(False)

    # --- input ---

    def set_keys(self, keys: KeyState) -> None:
        """Held-key state used by subsequent ticks."""
        self._keys = keys

    def process_input(self, mapper: InputMapper) -> KeyState:
        """Apply queued one-shot actions and sample held keys for the next tick."""
        for action in mapper.drain_actions():
            self.handle_action(action)
        self._keys = mapper.snapshot()
        return self._keys

    def handle_action(self, action: Action) -> None:
        if action == Action.JUMP:
            self.jump()
        elif action == Action.PAUSE:
            self.toggle_pause()
        elif action == Action.RESTART:
            if not self.is_playing:
                self.start()

    def jump(self) -> bool:
        """Try to jump. Accepted only while playing, on the ground, not mid-jump."""
        if self.state != GameState.PLAYING:
            return False
        if not self.physics.try_jump(self.player):
            return False

        x, y = self.player.bottom_center
        self.spawn_particles(x, y, COLOR_JUMP_DUST, self.config.jump_particles)
        self.audio.play_sound(SOUND_JUMP)
        return True

    # --- physics events ---

    def on_coin_collected(self, coin: Collectible) -> None:
        coin.active = False
        self.score += self.config.coin_value
        self._notify_hud()
        x, y = coin.center
        self.spawn_particles(x, y, coin.color, self.config.coin_particles)
        self.screen_shake = self.config.coin_shake
        self.audio.play_sound(SOUND_COLLECT)
        logger.debug("Coin collected at (%.0f, %.0f), score %d", coin.x, coin.y, self.score)

    def on_player_died(self) -> None:
        if self.state != GameState.PLAYING:
            return

        self.lives -= 1
        self._notify_hud()
        self.screen_shake = self.config.death_shake
        x, y = self.player.center
        self.spawn_particles(x, y, self.player.color, self.config.death_particles)
        self.audio.play_sound(SOUND_DEATH)
        logger.debug("Player died at (%.0f, %.0f), %d lives left", self.player.x, self.player.y, self.lives)

        if self.lives <= 0:
            self._end_game(completed=False)
        else:
            # Level geometry and remaining coins stay as they are.
            self.player.reset()

    def on_player_landed(self) -> None:
        logger.debug("Player landed at (%.0f, %.0f)", self.player.x, self.player.y)

    def on_level_complete(self) -> None:
        self.state = GameState.LEVEL_COMPLETE
        logger.info("Level %d complete, score %d", self.current_level, self.score)
        self.listener.on_level_complete(self.score)

    # --- helpers ---

    def spawn_particles(self, x: float, y: float, color: str, count: int) -> None:
        self.particles.extend(burst(x, y, color, count, self.rng))

    def _end_game(self, completed: bool) -> None:
        self.state = GameState.GAME_OVER
        self.completed = completed
        logger.info("Game over (completed=%s), final score %d", completed, self.score)
        self.listener.on_game_over(self.score, completed)

    def _notify_hud(self) -> None:
        self.listener.on_hud(self.score, self.lives, self.current_level)

    def get_state(self) -> Dict[str, Any]:
        """Snapshot of session state for observation/logging."""
        return {
            "state": self.state.value,
            "completed": self.completed,
            "score": self.score,
            "lives": self.lives,
            "level": self.current_level,
            "tick": self.tick_count,
            "screen_shake": self.screen_shake,
            "particles": len(self.particles),
            "coins_remaining": self.active_collectible_count(),
            "player_position": (self.player.x, self.player.y),
            "player_velocity": self.player.velocity,
            "player_grounded": self.player.is_on_ground,
        }
