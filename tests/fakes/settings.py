"""Synchronous driver for SettingsMachine tests.

SettingsHarness wires a SettingsMachine to fake collaborators and runs the
commands it returns inline, feeding each result straight back, so a test
reads like a user session: press keys, then assert on the model and the
fakes.
"""

from dataclasses import dataclass
from pathlib import Path

from rulem.core.repository import RepositoryEntry, RepositoryKind, RulemConfig
from rulem.gateway.config_store.fake import FakeConfigStore
from rulem.gateway.credentials.fake import FakeCredentialStore
from rulem.gateway.path_ops.fake import FakePathOps
from rulem.gateway.remote_ops.fake import FakeRemoteOps
from rulem.gateway.time.fake import FakeTime
from rulem.tui.settings.events import KeyPressed, SettingsCommand, SettingsEvent
from rulem.tui.settings.machine import SettingsMachine
from rulem.tui.settings.model import SettingsModel, SettingsServices
from rulem.tui.settings.state import SettingsState

VALID_TOKEN = "ghp_" + "a" * 36
OTHER_TOKEN = "ghp_" + "b" * 36


def local_entry(
    repo_id: str = "alpha-1700000000",
    name: str = "Alpha",
    path: str = "/home/user/rules/alpha",
) -> RepositoryEntry:
    return RepositoryEntry(
        id=repo_id,
        name=name,
        kind=RepositoryKind.LOCAL,
        path=path,
        created_at=1700000000,
    )


def remote_entry(
    repo_id: str = "team-rules-1700000100",
    name: str = "Team Rules",
    path: str = "/home/user/.local/share/rulem/rules",
    remote_url: str = "https://github.com/acme/rules.git",
    branch: str | None = "main",
) -> RepositoryEntry:
    return RepositoryEntry(
        id=repo_id,
        name=name,
        kind=RepositoryKind.REMOTE,
        path=path,
        created_at=1700000100,
        remote_url=remote_url,
        branch=branch,
    )


def config_of(*entries: RepositoryEntry) -> RulemConfig:
    return RulemConfig(repositories=tuple(entries))


@dataclass
class SettingsHarness:
    machine: SettingsMachine
    config_store: FakeConfigStore
    credentials: FakeCredentialStore
    remote_ops: FakeRemoteOps
    path_ops: FakePathOps
    time: FakeTime

    @property
    def model(self) -> SettingsModel:
        return self.machine.model

    @property
    def state(self) -> SettingsState:
        return self.machine.model.state

    def start(self) -> None:
        self.run(self.machine.start())

    def send(self, event: SettingsEvent) -> None:
        """Dispatch event and run every follow-up command to completion."""
        self.run(self.machine.update(event))

    def run(self, command: SettingsCommand | None) -> None:
        while command is not None:
            result = command()
            if result is None:
                return
            command = self.machine.update(result)

    def dispatch(self, key: str) -> SettingsCommand | None:
        """Dispatch one key and return the command without running it."""
        return self.machine.update(KeyPressed.named(key))

    def press(self, *keys: str) -> None:
        for key in keys:
            self.send(KeyPressed.named(key))

    def type_text(self, text: str) -> None:
        for character in text:
            self.send(KeyPressed.named(character))

    def submit(self, text: str) -> None:
        """Clear the input, type text and press enter."""
        self.press("ctrl+u")
        self.type_text(text)
        self.press("enter")

    def open_repository(self, repo_id: str) -> None:
        """Select repo_id on the main menu and open its action menu."""
        index = [entry.id for entry in self.model.config.repositories].index(repo_id)
        self.press(*(["down"] * index), "enter")


def make_harness(
    *,
    config: RulemConfig | None = None,
    config_store: FakeConfigStore | None = None,
    credentials: FakeCredentialStore | None = None,
    remote_ops: FakeRemoteOps | None = None,
    path_ops: FakePathOps | None = None,
    time: FakeTime | None = None,
    started: bool = True,
) -> SettingsHarness:
    """Build a harness; by default the initial configuration load has run."""
    services = SettingsServices(
        config_store=config_store or FakeConfigStore(config=config),
        credentials=credentials or FakeCredentialStore(),
        remote_ops=remote_ops or FakeRemoteOps(),
        path_ops=path_ops or FakePathOps(),
        time=time or FakeTime(),
    )
    harness = SettingsHarness(
        machine=SettingsMachine(SettingsModel(services)),
        config_store=services.config_store,
        credentials=services.credentials,
        remote_ops=services.remote_ops,
        path_ops=services.path_ops,
        time=services.time,
    )
    if started:
        harness.start()
    return harness


def repo_path(entry: RepositoryEntry) -> Path:
    return Path(entry.path)
