"""Keyboard input mapping.

Raw key events become two things: a held-key snapshot sampled once per tick
for movement, and a queue of one-shot actions (jump, pause, restart)
consumed at the next tick boundary. Jump is press-to-jump: holding the key
does not queue repeated jumps.

Key names are lowercase browser-style names ("a", "arrowleft", " ", ...).
The pygame frontend translates its key codes into these names.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List


class Action(Enum):
    """Discrete one-shot actions."""
    JUMP = "jump"
    PAUSE = "pause"
    RESTART = "restart"


@dataclass(frozen=True)
class KeyState:
    """Which movement keys are held this tick."""
    left: bool = False
    right: bool = False
    jump: bool = False


LEFT_KEYS = frozenset({"a", "arrowleft"})
RIGHT_KEYS = frozenset({"d", "arrowright"})
JUMP_KEYS = frozenset({" ", "space"})
PAUSE_KEYS = frozenset({"escape"})
RESTART_KEYS = frozenset({"r"})


class InputMapper:
    """Turns key-down/key-up events into held state and queued actions."""

    def __init__(self):
        self._left = False
        self._right = False
        self._jump = False
        self._actions: deque = deque()

    def key_down(self, key: str) -> None:
        key = key.lower()
        if key in LEFT_KEYS:
            self._left = True
        elif key in RIGHT_KEYS:
            self._right = True
        elif key in JUMP_KEYS:
            if not self._jump:
                self._actions.append(Action.JUMP)
            self._jump = True
        elif key in PAUSE_KEYS:
            self._actions.append(Action.PAUSE)
        elif key in RESTART_KEYS:
            self._actions.append(Action.RESTART)

    def key_up(self, key: str) -> None:
        key = key.lower()
        if key in LEFT_KEYS:
            self._left = False
        elif key in RIGHT_KEYS:
            self._right = False
        elif key in JUMP_KEYS:
            self._jump = False

    def snapshot(self) -> KeyState:
        """Held-key state to use for the coming tick."""
        return KeyState(left=self._left, right=self._right, jump=self._jump)

    def drain_actions(self) -> List[Action]:
        """Return queued actions in arrival order and clear the queue."""
        actions = list(self._actions)
        self._actions.clear()
        return actions

    def release_all(self) -> None:
        """Forget held keys, e.g. when the window loses focus."""
        self._left = self._right = self._jump = False
