"""Pytest configuration and shared fixtures."""

import os
import random

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import pytest

from coin_platformer.config import GameConfig
from coin_platformer.events import GameListener, AudioSink
from coin_platformer.physics import PhysicsWorld, CollisionEvents
from coin_platformer.session import GameSession


class RecordingListener(GameListener):
    """Keeps every notification, in order, as (name, args)."""

    def __init__(self):
        self.calls = []

    def on_hud(self, score, lives, level):
        self.calls.append(("hud", (score, lives, level)))

    def on_pause(self, paused):
        self.calls.append(("pause", (paused,)))

    def on_level_complete(self, score):
        self.calls.append(("level_complete", (score,)))

    def on_game_over(self, score, completed):
        self.calls.append(("game_over", (score, completed)))

    def on_menus_hidden(self):
        self.calls.append(("menus_hidden", ()))

    def names(self):
        return [name for name, _ in self.calls]


class RecordingAudio(AudioSink):
    def __init__(self):
        self.played = []

    def play_sound(self, name):
        self.played.append(name)


class RecordingEvents(CollisionEvents):
    def __init__(self):
        self.coins = []
        self.deaths = 0
        self.landings = 0

    def on_coin_collected(self, coin):
        self.coins.append(coin)

    def on_player_died(self):
        self.deaths += 1

    def on_player_landed(self):
        self.landings += 1


@pytest.fixture
def physics():
    """Fresh physics world for each test."""
    return PhysicsWorld()


@pytest.fixture
def events():
    return RecordingEvents()


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def session(listener, audio):
    """Idle session on the built-in levels with a seeded particle rng."""
    return GameSession(listener=listener, audio=audio, rng=random.Random(7))


@pytest.fixture
def playing(session):
    """Session that has just started level 1."""
    session.start()
    return session
