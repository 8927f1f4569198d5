"""Single-line text input shared by every input state of the settings menu."""

from dataclasses import dataclass
from enum import Enum, auto

from rulem.tui.settings.events import KeyPressed

DEFAULT_CHAR_LIMIT = 256
MASK_CHAR = "•"


class EchoMode(Enum):
    NORMAL = auto()
    MASKED = auto()


@dataclass(frozen=True)
class InputConfig:
    """Everything an input state sets when it takes over the widget."""

    value: str = ""
    placeholder: str = ""
    echo_mode: EchoMode = EchoMode.NORMAL
    char_limit: int = DEFAULT_CHAR_LIMIT


class TextInputModel:
    """Editable value with placeholder, character limit and echo mode.

    The widget only grows or shrinks at the end; there is no cursor
    movement. Rendering reads display_text(), which masks the value in
    MASKED mode and falls back to the placeholder when empty.
    """

    def __init__(self, width: int = 60) -> None:
        self.width = width
        self.value = ""
        self.placeholder = ""
        self.echo_mode = EchoMode.NORMAL
        self.char_limit = DEFAULT_CHAR_LIMIT

    def reset(self, config: InputConfig) -> None:
        """Replace every setting at once; nothing carries over from the previous state."""
        self.placeholder = config.placeholder
        self.echo_mode = config.echo_mode
        self.char_limit = config.char_limit
        self.value = config.value[: config.char_limit]

    def handle_key(self, event: KeyPressed) -> bool:
        """Apply an editing key. Returns True when the key was consumed."""
        if event.key == "backspace":
            self.value = self.value[:-1]
            return True
        if event.key == "ctrl+u":
            self.value = ""
            return True
        if event.is_printable:
            if len(self.value) < self.char_limit:
                self.value += event.character or ""
            return True
        return False

    def display_text(self) -> str:
        if not self.value:
            return self.placeholder
        if self.echo_mode == EchoMode.MASKED:
            return MASK_CHAR * len(self.value)
        return self.value

    @property
    def showing_placeholder(self) -> bool:
        return not self.value
