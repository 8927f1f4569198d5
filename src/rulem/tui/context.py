"""Dependencies of the rulem CLI and its settings TUI."""

from dataclasses import dataclass
from pathlib import Path

from rulem.gateway.config_store.abc import ConfigStore
from rulem.gateway.config_store.fake import FakeConfigStore
from rulem.gateway.config_store.real import RealConfigStore
from rulem.gateway.credentials.abc import CredentialStore
from rulem.gateway.credentials.fake import FakeCredentialStore
from rulem.gateway.credentials.real import RealCredentialStore
from rulem.gateway.path_ops.abc import PathOps
from rulem.gateway.path_ops.fake import FakePathOps
from rulem.gateway.path_ops.real import RealPathOps
from rulem.gateway.remote_ops.abc import RemoteOps
from rulem.gateway.remote_ops.fake import FakeRemoteOps
from rulem.gateway.remote_ops.real import RealRemoteOps
from rulem.gateway.time.abc import Time
from rulem.gateway.time.fake import FakeTime
from rulem.gateway.time.real import RealTime
from rulem.tui.runner import FakeTuiRunner, RealTuiRunner, TuiRunner
from rulem.tui.settings.model import SettingsServices


@dataclass(frozen=True)
class RulemContext:
    """Every collaborator a rulem command needs.

    Commands receive this through click's ``ctx.obj``. Tests build it with
    for_test() so no command touches git, the credential helper or the
    real configuration file.
    """

    config_store: ConfigStore
    credentials: CredentialStore
    remote_ops: RemoteOps
    path_ops: PathOps
    time: Time
    tui_runner: TuiRunner

    @property
    def services(self) -> SettingsServices:
        return SettingsServices(
            config_store=self.config_store,
            credentials=self.credentials,
            remote_ops=self.remote_ops,
            path_ops=self.path_ops,
            time=self.time,
        )

    @classmethod
    def for_production(cls, config_path: Path | None = None) -> "RulemContext":
        """Create a context backed by the filesystem, git and the Textual event loop.

        Args:
            config_path: Configuration file; None uses $RULEM_CONFIG_PATH or the XDG default
        """
        time = RealTime()
        return cls(
            config_store=RealConfigStore(time, config_path),
            credentials=RealCredentialStore(),
            remote_ops=RealRemoteOps(),
            path_ops=RealPathOps(),
            time=time,
            tui_runner=RealTuiRunner(),
        )

    @classmethod
    def for_test(
        cls,
        *,
        config_store: ConfigStore | None = None,
        credentials: CredentialStore | None = None,
        remote_ops: RemoteOps | None = None,
        path_ops: PathOps | None = None,
        time: Time | None = None,
        tui_runner: TuiRunner | None = None,
    ) -> "RulemContext":
        """Create a context where every unspecified collaborator is a fake.

        Example:
            tui_runner = FakeTuiRunner()
            ctx = RulemContext.for_test(tui_runner=tui_runner)
            result = CliRunner().invoke(cli, ["settings"], obj=ctx)
            assert len(tui_runner.apps_run) == 1
        """
        return cls(
            config_store=config_store or FakeConfigStore(),
            credentials=credentials or FakeCredentialStore(),
            remote_ops=remote_ops or FakeRemoteOps(),
            path_ops=path_ops or FakePathOps(),
            time=time or FakeTime(),
            tui_runner=tui_runner or FakeTuiRunner(),
        )
