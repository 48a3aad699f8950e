"""pygame frontend: input capture, rendering and the fixed-rate game loop.

Everything here is presentation. The engine feeds key events into an
InputMapper, ticks the GameSession, and draws whatever state the session
exposes. Menu overlays follow the notifications the session sends to its
GameListener.
"""

import argparse
import logging
import math
import random
from typing import Optional, Tuple, Dict

import pygame

from .audio import SoundBank
from .config import GameConfig
from .events import GameListener, AudioSink
from .input import InputMapper
from .levels import LevelLibrary
from .session import GameSession, GameState

logger = logging.getLogger(__name__)


COLOR_TEXT = (255, 255, 255)
COLOR_OVERLAY = (0, 0, 0, 160)
COLOR_DETAIL = (255, 255, 255)
COLOR_HUD = (255, 215, 0)

# Shake below this magnitude is not drawn. The session never zeroes it.
MIN_VISIBLE_SHAKE = 0.01

# pygame key code -> InputMapper key name
KEY_NAMES: Dict[int, str] = {
    pygame.K_a: "a",
    pygame.K_LEFT: "arrowleft",
    pygame.K_d: "d",
    pygame.K_RIGHT: "arrowright",
    pygame.K_SPACE: " ",
    pygame.K_ESCAPE: "escape",
    pygame.K_r: "r",
}


class OverlayListener(GameListener):
    """Tracks which menu overlay should be on screen and the HUD values."""

    def __init__(self):
        self.score = 0
        self.lives = 0
        self.level = 0
        self.overlay: Optional[str] = None  # None, "pause", "level_complete", "game_over"
        self.final_score = 0
        self.completed = False

    def on_hud(self, score, lives, level):
        self.score, self.lives, self.level = score, lives, level

    def on_pause(self, paused):
        self.overlay = "pause" if paused else None

    def on_level_complete(self, score):
        self.overlay = "level_complete"
        self.final_score = score

    def on_game_over(self, score, completed):
        self.overlay = "game_over"
        self.final_score = score
        self.completed = completed

    def on_menus_hidden(self):
        self.overlay = None


class PlatformerEngine:
    """Main game engine coordinating input, session and rendering.

    Handles:
    - Game loop with fixed timestep
    - Pygame rendering with screen shake
    - Keyboard input
    - Menu overlays (pause, level complete, game over)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        levels: Optional[LevelLibrary] = None,
        audio: Optional[AudioSink] = None,
    ):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            levels: Level library. Uses the built-in levels if None.
            audio: Sound cue sink. Silent if None.
        """
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.world_width, self.config.world_height)
        )
        pygame.display.set_caption("Coin Platformer")
        self.clock = pygame.time.Clock()

        self.overlay = OverlayListener()
        self.input = InputMapper()
        self.session = GameSession(
            config=self.config, levels=levels, listener=self.overlay, audio=audio,
        )
        self._shake_rng = random.Random()
        self.running = False

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_RETURN and self.session.state == GameState.LEVEL_COMPLETE:
                    self.session.advance_to_next_level()
                    continue
                name = KEY_NAMES.get(event.key)
                if name is not None:
                    self.input.key_down(name)
            elif event.type == pygame.KEYUP:
                name = KEY_NAMES.get(event.key)
                if name is not None:
                    self.input.key_up(name)
            elif event.type == pygame.WINDOWFOCUSLOST:
                self.input.release_all()

    def update(self, dt: float) -> None:
        """Apply queued actions, then advance the session one tick."""
        self.session.process_input(self.input)
        self.session.tick(dt)

    def _shake_offset(self) -> Tuple[float, float]:
        shake = self.session.screen_shake
        if shake <= MIN_VISIBLE_SHAKE:
            return 0.0, 0.0
        return (
            self._shake_rng.random() * shake - shake / 2,
            self._shake_rng.random() * shake - shake / 2,
        )

    def render(self) -> None:
        """Render current game state."""
        session = self.session
        template = session.current_template()
        background = template.background if template else "#000000"
        self.screen.fill(pygame.Color(background))

        ox, oy = self._shake_offset()
        now = pygame.time.get_ticks()

        for plat in session.platforms:
            pygame.draw.rect(
                self.screen, pygame.Color(plat.color),
                (plat.x + ox, plat.y + oy, plat.width, plat.height),
            )

        # Coins bob up and down; collected ones are not drawn
        bounce = math.sin(now / 200) * 3
        for coin in session.collectibles:
            if coin.active:
                pygame.draw.rect(
                    self.screen, pygame.Color(coin.color),
                    (coin.x + ox, coin.y + bounce + oy, coin.width, coin.height),
                )

        for enemy in session.enemies:
            pygame.draw.rect(
                self.screen, pygame.Color(enemy.color),
                (enemy.x + ox, enemy.y + oy, enemy.width, enemy.height),
            )

        self._draw_player(ox, oy, now)
        self._draw_particles(ox, oy)
        self._draw_hud()
        self._draw_overlay()

        pygame.display.flip()

    def _draw_player(self, ox: float, oy: float, now: int) -> None:
        player = self.session.player
        x, y = player.x + ox, player.y + oy
        bob = math.sin(now / 150) * 2 if player.is_on_ground else 0.0

        pygame.draw.rect(self.screen, pygame.Color(player.color), (x, y + bob, player.width, player.height))

        # Eye sits toward the facing side
        if player.direction > 0:
            eye_x = x + player.width * 0.6
        else:
            eye_x = x + player.width * 0.4 - 8
        pygame.draw.rect(self.screen, COLOR_DETAIL, (eye_x, y + player.height * 0.2 + bob, 8, 8))

        if abs(player.velocity_x) > 0.1:
            leg = math.sin(now / 100) * 5
            feet = y + player.height + bob
            pygame.draw.rect(self.screen, COLOR_DETAIL, (x + 5, feet, 8, 10 + leg))
            pygame.draw.rect(self.screen, COLOR_DETAIL, (x + player.width - 13, feet, 8, 10 - leg))

    def _draw_particles(self, ox: float, oy: float) -> None:
        for particle in self.session.particles:
            size = max(1, int(particle.size))
            color = pygame.Color(particle.color)
            color.a = max(0, min(255, int(particle.life * 255)))
            surface = pygame.Surface((size, size), pygame.SRCALPHA)
            surface.fill(color)
            self.screen.blit(surface, (particle.x + ox, particle.y + oy))

    def _draw_hud(self) -> None:
        font = pygame.font.Font(None, 28)
        hud = f"Level: {self.overlay.level}   Score: {self.overlay.score}   Lives: {self.overlay.lives}"
        surface = font.render(hud, True, COLOR_HUD)
        self.screen.blit(surface, (10, 10))

    def _draw_overlay(self) -> None:
        """Draw the current menu overlay, if any."""
        state = self.overlay.overlay
        if self.session.state == GameState.IDLE:
            lines = ["COIN PLATFORMER", "Press R to start"]
        elif state == "pause":
            lines = ["PAUSED", "Press Esc to resume"]
        elif state == "level_complete":
            lines = ["LEVEL COMPLETE!", f"Score: {self.overlay.final_score}", "Press Enter for the next level"]
        elif state == "game_over":
            title = "Congratulations! You completed the game!" if self.overlay.completed else "GAME OVER"
            lines = [title, f"Final Score: {self.overlay.final_score}", "Press R to play again"]
        else:
            return

        backdrop = pygame.Surface((self.config.world_width, self.config.world_height), pygame.SRCALPHA)
        backdrop.fill(COLOR_OVERLAY)
        self.screen.blit(backdrop, (0, 0))

        font = pygame.font.Font(None, 40)
        cx = self.config.world_width // 2
        cy = self.config.world_height // 2 - 20 * (len(lines) - 1)
        for i, line in enumerate(lines):
            surface = font.render(line, True, COLOR_TEXT)
            self.screen.blit(surface, surface.get_rect(center=(cx, cy + i * 40)))

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        dt = 1.0 / self.config.fps
        logger.info("Running at %d fps", self.config.fps)

        while self.running:
            self.handle_events()
            self.update(dt)
            self.render()
            self.clock.tick(self.config.fps)

        pygame.quit()


def main(argv=None) -> None:
    """Console entry point: open a window and play."""
    parser = argparse.ArgumentParser(description="Play the coin platformer.")
    parser.add_argument("--levels", help="JSON level file (defaults to the built-in levels)")
    parser.add_argument("--sounds", default=".", help="Directory holding jump/collect/death .wav files")
    parser.add_argument("--verbose", action="store_true", help="Log per-event detail")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    levels = LevelLibrary.from_json(args.levels) if args.levels else None
    audio = SoundBank(args.sounds)
    engine = PlatformerEngine(levels=levels, audio=audio)
    audio.load_async()
    engine.session.start()
    engine.run()
