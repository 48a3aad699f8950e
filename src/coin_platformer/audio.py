"""Sound cues through pygame.mixer.

Sounds load in a background thread so the game loop never waits on disk or
the audio device. A cue requested before its sound has loaded is dropped,
not queued. Every audio failure is logged and swallowed; gameplay never
sees it.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Optional, Union

import pygame

from .events import AudioSink, SOUND_NAMES

logger = logging.getLogger(__name__)


class SoundBank(AudioSink):
    """Loads `<name>.wav` for each cue from a directory and plays them."""

    def __init__(self, sound_dir: Union[str, Path] = "."):
        self.sound_dir = Path(sound_dir)
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._lock = threading.Lock()
        self._loader: Optional[threading.Thread] = None
        self.initialized = False

    def load(self) -> None:
        """Initialize the mixer and load every cue. Blocks until done."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("Audio unavailable: %s", exc)
            return

        for name in SOUND_NAMES:
            path = self.sound_dir / f"{name}.wav"
            try:
                sound = pygame.mixer.Sound(str(path))
            except (pygame.error, FileNotFoundError) as exc:
                logger.warning("Could not load sound %r from %s: %s", name, path, exc)
                continue
            with self._lock:
                self._sounds[name] = sound

        self.initialized = True

    def load_async(self) -> threading.Thread:
        """Start loading in a daemon thread and return it."""
        self._loader = threading.Thread(target=self.load, name="sound-loader", daemon=True)
        self._loader.start()
        return self._loader

    def loaded(self, name: str) -> bool:
        with self._lock:
            return name in self._sounds

    def play_sound(self, name: str) -> None:
        with self._lock:
            sound = self._sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Error playing sound %r: %s", name, exc)
