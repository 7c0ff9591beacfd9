"""Screen abstraction for the weather view - allows swapping the terminal with test backends."""
import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from card_layout import DrawOp

CLEAR_SCREEN = "\x1b[2J\x1b[H"
PROMPT = "Location: "


def ops_to_lines(ops: List[DrawOp]) -> List[str]:
    """
    Turn layout operations into plain text lines.

    Args:
        ops: Output of card_layout.calculate_layout()

    Returns:
        One string per drawn line
    """
    lines = []
    for op in ops:
        text = op.kwargs.get("text", "")
        if op.op_type == "input":
            if op.kwargs.get("shaking"):
                lines.append(f">> {text} <<  (type a location)")
            else:
                lines.append(f"> {text}")
        elif op.op_type == "banner":
            lines.append(f"[!] {text}")
        else:
            lines.append(text)
    return lines


class Screen(ABC):
    """Abstract output surface the view draws each frame to."""

    @abstractmethod
    def show(self, ops: List[DrawOp]) -> None:
        """
        Replace whatever is displayed with a new frame.

        Args:
            ops: Drawing operations for the frame
        """
        pass


class ConsoleScreen(Screen):
    """Screen implementation writing frames to a terminal stream."""

    def __init__(self, stream: Optional[TextIO] = None, clear: bool = False):
        """
        Frames are appended below each other unless clear is set, so a
        location being typed stays on the terminal across redraws.

        Args:
            stream: Output stream (defaults to sys.stdout)
            clear: Clear the terminal before each frame
        """
        self._stream = stream or sys.stdout
        self._clear = clear

    def show(self, ops: List[DrawOp]) -> None:
        if self._clear:
            self._stream.write(CLEAR_SCREEN)
        self._stream.write("\n".join(ops_to_lines(ops)) + "\n")
        # Typing continues after the prompt
        self._stream.write(PROMPT)
        self._stream.flush()


class FakeScreen(Screen):
    """
    Fake screen for testing - keeps every frame in memory.

    Useful for unit tests and development without a terminal.
    """

    def __init__(self):
        self.frames: List[List[DrawOp]] = []

    def show(self, ops: List[DrawOp]) -> None:
        self.frames.append(list(ops))

    @property
    def last_frame(self) -> List[DrawOp]:
        return self.frames[-1] if self.frames else []

    def op_types(self) -> List[str]:
        """Op types of the last frame, in drawing order."""
        return [op.op_type for op in self.last_frame]

    def to_text(self) -> str:
        """Last frame as the console would print it (for testing/debugging)."""
        return "\n".join(ops_to_lines(self.last_frame))
