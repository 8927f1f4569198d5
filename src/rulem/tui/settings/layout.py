"""Error surface and window geometry shared by all settings screens."""

from dataclasses import dataclass

MIN_INPUT_WIDTH = 20
INPUT_WIDTH_PADDING = 8


class ErrorSurface:
    """Holds at most one error, shown by the current screen.

    Setting replaces the previous error; there is never more than one
    message on screen.
    """

    def __init__(self) -> None:
        self._error: Exception | None = None

    def set(self, error: Exception) -> None:
        self._error = error

    def clear(self) -> None:
        self._error = None

    @property
    def current(self) -> Exception | None:
        return self._error

    @property
    def message(self) -> str | None:
        if self._error is None:
            return None
        return str(self._error)


@dataclass(frozen=True)
class LayoutState:
    width: int = 80
    height: int = 24

    @property
    def input_width(self) -> int:
        return max(MIN_INPUT_WIDTH, self.width - INPUT_WIDTH_PADDING)
