"""Error kinds raised and routed by the settings flows.

Flows distinguish four kinds of failure:

- ValidationError: a synchronous input check failed (empty, too long,
  duplicate, malformed URL/branch/path). Add flows keep these inline.
- PreconditionError: the environment blocks the change (dirty working
  tree, missing remote branch, absent credential).
- CollaboratorError: a store or remote operation failed. Wraps the
  underlying exception and prefixes it with what was being attempted.
- UnknownChangeKind: a flow dispatched a change the commit step does not
  understand. Programmer error, surfaced as a generic failure.
"""


class SettingsError(Exception):
    """Base class for errors surfaced on the settings error screen."""


class ValidationError(SettingsError):
    """User input failed a synchronous check."""


class PreconditionError(SettingsError):
    """The repository is not in a state that allows the change."""


class CollaboratorError(SettingsError):
    """A collaborator (config store, credential store, git) failed."""

    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.cause = cause


class UnknownChangeKind(SettingsError):
    """A commit step received a change kind it does not handle."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"unknown change kind: {kind}")
        self.kind = kind
