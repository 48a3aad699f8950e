"""Interfaces between the game session and its presentation collaborators.

The session never draws or plays anything itself. It notifies a
GameListener about HUD changes and menu transitions, and asks an AudioSink
to play named cues.
"""


SOUND_JUMP = "jump"
SOUND_COLLECT = "collect"
SOUND_DEATH = "death"
SOUND_NAMES = (SOUND_JUMP, SOUND_COLLECT, SOUND_DEATH)


class GameListener:
    """Observer for session state changes. Every hook defaults to a no-op."""

    def on_hud(self, score: int, lives: int, level: int) -> None:
        pass

    def on_pause(self, paused: bool) -> None:
        pass

    def on_level_complete(self, score: int) -> None:
        pass

    def on_game_over(self, score: int, completed: bool) -> None:
        pass

    def on_menus_hidden(self) -> None:
        pass


class AudioSink:
    """Fire-and-forget sound cue player."""

    def play_sound(self, name: str) -> None:
        raise NotImplementedError


class NullAudio(AudioSink):
    """Audio sink that ignores every cue."""

    def play_sound(self, name: str) -> None:
        pass
