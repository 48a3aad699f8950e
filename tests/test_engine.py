"""Tests for the pygame frontend."""

import os
import pytest

# Use dummy video driver for headless testing
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import pygame

from coin_platformer.config import GameConfig
from coin_platformer.engine import PlatformerEngine, OverlayListener
from coin_platformer.session import GameState


@pytest.fixture
def engine():
    engine = PlatformerEngine(GameConfig())
    yield engine
    pygame.quit()


def post_key(event_type, key):
    pygame.event.post(pygame.event.Event(event_type, key=key))


class TestPlatformerEngine:
    def test_initialization(self, engine):
        assert engine.session.state == GameState.IDLE
        assert engine.screen.get_size() == (800, 600)

    def test_session_built_from_levels_and_audio(self):
        from coin_platformer.events import NullAudio
        from coin_platformer.levels import LevelLibrary

        audio = NullAudio()
        engine = PlatformerEngine(levels=LevelLibrary(), audio=audio)
        try:
            assert engine.session.audio is audio
            engine.session.start()
            assert engine.session.state == GameState.GAME_OVER
            assert engine.overlay.overlay == "game_over"
        finally:
            pygame.quit()

    def test_render_idle(self, engine):
        engine.render()

    def test_update_ticks_session(self, engine):
        engine.session.start()
        engine.update(1 / 60)
        assert engine.session.tick_count == 1

    def test_restart_key_starts_game(self, engine):
        post_key(pygame.KEYDOWN, pygame.K_r)
        engine.handle_events()
        engine.update(1 / 60)
        assert engine.session.state == GameState.PLAYING
        assert engine.overlay.level == 1

    def test_arrow_keys_reach_session(self, engine):
        engine.session.start()
        post_key(pygame.KEYDOWN, pygame.K_RIGHT)
        engine.handle_events()
        engine.update(1 / 60)
        assert engine.session.player.velocity_x == pytest.approx(4.25)

        post_key(pygame.KEYUP, pygame.K_RIGHT)
        engine.handle_events()
        assert not engine.input.snapshot().right

    def test_escape_shows_pause_overlay(self, engine):
        engine.session.start()
        post_key(pygame.KEYDOWN, pygame.K_ESCAPE)
        engine.handle_events()
        engine.update(1 / 60)
        assert engine.session.is_paused
        assert engine.overlay.overlay == "pause"
        engine.render()

    def test_enter_advances_after_level_complete(self, engine):
        engine.session.start()
        for coin in engine.session.collectibles:
            coin.active = False
        engine.update(1 / 60)
        assert engine.overlay.overlay == "level_complete"

        post_key(pygame.KEYDOWN, pygame.K_RETURN)
        engine.handle_events()
        assert engine.session.current_level == 2
        assert engine.overlay.overlay is None

    def test_render_with_effects(self, engine):
        session = engine.session
        session.start()
        session.on_coin_collected(session.collectibles[0])
        session.player.velocity_x = 3.0
        session.player.direction = -1
        engine.render()

    def test_render_game_over(self, engine):
        engine.session.start()
        engine.session.lives = 1
        engine.session.on_player_died()
        assert engine.overlay.overlay == "game_over"
        engine.render()

    def test_shake_offset_bounded(self, engine):
        engine.session.screen_shake = 10
        for _ in range(50):
            ox, oy = engine._shake_offset()
            assert -5 <= ox <= 5
            assert -5 <= oy <= 5

    def test_tiny_shake_not_drawn(self, engine):
        engine.session.screen_shake = 0.001
        assert engine._shake_offset() == (0.0, 0.0)


class TestOverlayListener:
    def test_tracks_transitions(self):
        overlay = OverlayListener()
        overlay.on_hud(200, 2, 1)
        assert (overlay.score, overlay.lives, overlay.level) == (200, 2, 1)

        overlay.on_pause(True)
        assert overlay.overlay == "pause"
        overlay.on_pause(False)
        assert overlay.overlay is None

        overlay.on_game_over(900, True)
        assert overlay.overlay == "game_over"
        assert overlay.completed
        assert overlay.final_score == 900

        overlay.on_menus_hidden()
        assert overlay.overlay is None
