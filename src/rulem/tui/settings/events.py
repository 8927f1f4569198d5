"""Events consumed by the settings state machine.

Keyboard, resize and reload events come from the host. Every other event
is the result of a command the machine issued; those carry ``origin``, the
state that issued the command, so the machine can drop results that
arrive after the user has moved on.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulem.core.repository import RulemConfig
    from rulem.tui.settings.state import SettingsState

_NAMED_CHARACTERS = {"space": " "}


@dataclass(frozen=True)
class KeyPressed:
    """A key press.

    Attributes:
        key: Normalized key name, e.g. "a", "enter", "escape", "ctrl+c"
        character: Printable character produced by the key, if any
    """

    key: str
    character: str | None = None

    @classmethod
    def named(cls, key: str) -> KeyPressed:
        """Build an event from a key name the way the terminal host reports it."""
        if len(key) == 1:
            return cls(key=key, character=key)
        return cls(key=key, character=_NAMED_CHARACTERS.get(key))

    @property
    def is_printable(self) -> bool:
        return (
            self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


@dataclass(frozen=True)
class WindowResized:
    width: int
    height: int


@dataclass(frozen=True)
class ConfigReloaded:
    """Result of loading the configuration; exactly one field is set."""

    config: RulemConfig | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class AsyncResult:
    """Base for results of commands issued from a specific state."""

    origin: SettingsState


@dataclass(frozen=True)
class DirtyCheckResult(AsyncResult):
    """Outcome of a working-tree check; error is set when the check itself failed."""

    dirty: bool = False
    error: Exception | None = None


@dataclass(frozen=True)
class EditBranchDirtyResult(DirtyCheckResult):
    pass


@dataclass(frozen=True)
class EditClonePathDirtyResult(DirtyCheckResult):
    pass


@dataclass(frozen=True)
class RefreshDirtyResult(DirtyCheckResult):
    pass


@dataclass(frozen=True)
class FlowFailed(AsyncResult):
    """A flow's command failed; the machine routes it to that flow's error state."""

    error: Exception | None = None


@dataclass(frozen=True)
class AddLocalFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class AddRemoteFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class EditNameFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class EditBranchFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class EditClonePathFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class DeleteFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class UpdatePATFailed(FlowFailed):
    pass


@dataclass(frozen=True)
class AddRemotePATNeeded(AsyncResult):
    """No usable token is stored; reason explains why a stored one was rejected."""

    reason: str | None = None


@dataclass(frozen=True)
class UpdatePATValidated(AsyncResult):
    pass


@dataclass(frozen=True)
class RefreshDone(AsyncResult):
    error: Exception | None = None


@dataclass(frozen=True)
class SettingsComplete(AsyncResult):
    """A commit step persisted its change."""

    config: RulemConfig | None = None


SettingsEvent = KeyPressed | WindowResized | ConfigReloaded | AsyncResult

# Work the host runs off the event loop; its return value is fed back to
# the machine as the next event.
SettingsCommand = Callable[[], "SettingsEvent | None"]
