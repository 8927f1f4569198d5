"""Tests for RulemContext wiring."""

from pathlib import Path

from rulem.gateway.config_store.fake import FakeConfigStore
from rulem.gateway.config_store.real import RealConfigStore
from rulem.gateway.credentials.fake import FakeCredentialStore
from rulem.gateway.remote_ops.real import RealRemoteOps
from rulem.tui.context import RulemContext
from rulem.tui.runner import FakeTuiRunner, RealTuiRunner


def test_for_test_defaults_to_fakes() -> None:
    ctx = RulemContext.for_test()
    assert isinstance(ctx.config_store, FakeConfigStore)
    assert isinstance(ctx.credentials, FakeCredentialStore)
    assert isinstance(ctx.tui_runner, FakeTuiRunner)


def test_for_test_keeps_given_collaborators() -> None:
    store = FakeConfigStore()
    ctx = RulemContext.for_test(config_store=store)
    assert ctx.config_store is store
    assert ctx.services.config_store is store


def test_services_share_collaborators() -> None:
    ctx = RulemContext.for_test()
    services = ctx.services
    assert services.remote_ops is ctx.remote_ops
    assert services.path_ops is ctx.path_ops
    assert services.time is ctx.time


def test_for_production_uses_given_config_path(tmp_path: Path) -> None:
    config_path = tmp_path / "rulem.toml"
    ctx = RulemContext.for_production(config_path)
    assert isinstance(ctx.config_store, RealConfigStore)
    assert ctx.config_store.config_path() == config_path
    assert isinstance(ctx.remote_ops, RealRemoteOps)
    assert isinstance(ctx.tui_runner, RealTuiRunner)
