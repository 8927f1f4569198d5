"""Repository list, per-repository actions, add-type picker and the Complete screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

from rulem.core.repository import RepositoryEntry, RulemConfig
from rulem.tui.settings.events import KeyPressed, SettingsCommand
from rulem.tui.settings.flows import (
    add_local,
    add_remote,
    delete,
    edit_branch,
    edit_clone_path,
    edit_name,
    refresh,
    update_credential,
)
from rulem.tui.settings.flows.common import BACK_KEYS, SELECT_KEYS, KeyHandler, move_cursor
from rulem.tui.settings.model import SettingsModel
from rulem.tui.settings.state import ExitReason, SettingsState

logger = logging.getLogger(__name__)


class MenuAction(Enum):
    OPEN_REPOSITORY = auto()
    ADD_REPOSITORY = auto()
    UPDATE_CREDENTIAL = auto()


@dataclass(frozen=True)
class MenuItem:
    label: str
    action: MenuAction
    repository_id: str | None = None


class RepositoryAction(Enum):
    """Entries of the per-repository action menu; the value is the label."""

    UPDATE_BRANCH = "🌿 Update Branch"
    UPDATE_CLONE_PATH = "📂 Update Clone Path"
    MANUAL_REFRESH = "🔄 Manual Refresh"
    CHANGE_NAME = "✏️  Change Repository Name"
    DELETE = "🗑️  Delete Repository"
    BACK = "← Back"


class AddType(Enum):
    """Choices on the AddType screen; the value is the label."""

    LOCAL = "📁 Local Directory"
    REMOTE = "🌐 Remote Git Repository"


ADD_TYPES = (AddType.LOCAL, AddType.REMOTE)


def main_menu_items(config: RulemConfig) -> list[MenuItem]:
    """Repositories in configuration order, then the two global actions."""
    items = [
        MenuItem(
            label=_repository_label(entry),
            action=MenuAction.OPEN_REPOSITORY,
            repository_id=entry.id,
        )
        for entry in config.repositories
    ]
    items.append(MenuItem(label="➕ Add New Repository", action=MenuAction.ADD_REPOSITORY))
    items.append(MenuItem(label="🔑 Update Credential", action=MenuAction.UPDATE_CREDENTIAL))
    return items


def _repository_label(entry: RepositoryEntry) -> str:
    if entry.is_remote:
        return f"🌐 {entry.name}"
    return f"📁 {entry.name}"


def repository_actions(entry: RepositoryEntry | None) -> list[RepositoryAction]:
    actions: list[RepositoryAction] = []
    if entry is not None and entry.is_remote:
        actions.extend(
            [
                RepositoryAction.UPDATE_BRANCH,
                RepositoryAction.UPDATE_CLONE_PATH,
                RepositoryAction.MANUAL_REFRESH,
            ]
        )
    actions.extend(
        [RepositoryAction.CHANGE_NAME, RepositoryAction.DELETE, RepositoryAction.BACK]
    )
    return actions


def handle_main_menu_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    items = main_menu_items(model.config)
    if move_cursor(model, event, len(items)):
        return None
    if event.key in BACK_KEYS:
        logger.info("settings_exit_to_parent")
        model.exit_reason = ExitReason.BACK_TO_PARENT
        return None
    if event.key not in SELECT_KEYS:
        return None

    item = items[min(model.cursor, len(items) - 1)]
    if item.action == MenuAction.OPEN_REPOSITORY:
        logger.info("settings_open_repository %s", item.repository_id)
        model.transition_to(SettingsState.REPOSITORY_ACTIONS)
        model.selected_repository_id = item.repository_id
    elif item.action == MenuAction.ADD_REPOSITORY:
        model.transition_to(SettingsState.ADD_TYPE)
    elif item.action == MenuAction.UPDATE_CREDENTIAL:
        update_credential.start(model)
    return None


def handle_repository_actions_keys(
    model: SettingsModel, event: KeyPressed
) -> SettingsCommand | None:
    actions = repository_actions(model.selected_repository())
    if move_cursor(model, event, len(actions)):
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.MAIN_MENU)
        return None
    if event.key not in SELECT_KEYS:
        return None

    action = actions[min(model.cursor, len(actions) - 1)]
    logger.info("settings_repository_action %s", action.name.lower())
    if action == RepositoryAction.UPDATE_BRANCH:
        edit_branch.start(model)
    elif action == RepositoryAction.UPDATE_CLONE_PATH:
        edit_clone_path.start(model)
    elif action == RepositoryAction.MANUAL_REFRESH:
        refresh.start(model)
    elif action == RepositoryAction.CHANGE_NAME:
        edit_name.start(model)
    elif action == RepositoryAction.DELETE:
        delete.start(model)
    elif action == RepositoryAction.BACK:
        model.transition_to(SettingsState.MAIN_MENU)
    return None


def handle_add_type_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    if move_cursor(model, event, len(ADD_TYPES)):
        return None
    if event.key in BACK_KEYS:
        model.transition_to(SettingsState.MAIN_MENU)
        return None
    if event.key not in SELECT_KEYS:
        return None
    if ADD_TYPES[model.cursor] == AddType.LOCAL:
        add_local.start(model)
    else:
        add_remote.start(model)
    return None


def handle_complete_keys(model: SettingsModel, event: KeyPressed) -> SettingsCommand | None:
    model.transition_to(SettingsState.MAIN_MENU)
    return None


KEY_HANDLERS: dict[SettingsState, KeyHandler] = {
    SettingsState.MAIN_MENU: handle_main_menu_keys,
    SettingsState.REPOSITORY_ACTIONS: handle_repository_actions_keys,
    SettingsState.ADD_TYPE: handle_add_type_keys,
    SettingsState.COMPLETE: handle_complete_keys,
}
