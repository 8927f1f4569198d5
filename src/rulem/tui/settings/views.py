"""Plain-text rendering of each settings screen.

render() turns a SettingsModel into a ScreenContent; the Textual app only
copies those strings into widgets, so every screen can be checked without
starting an event loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from rulem.core.repository import RepositoryEntry
from rulem.tui.settings.flows.menu import (
    ADD_TYPES,
    main_menu_items,
    repository_actions,
)
from rulem.tui.settings.model import SettingsModel
from rulem.tui.settings.state import INPUT_STATES, SettingsState

CURSOR = "❯"

INPUT_HELP = "Enter to continue • Esc to go back"
EDIT_HELP = "Enter to save • Esc to cancel"
CONFIRM_HELP = "Enter/y to confirm • n to cancel • Esc to go back"
ERROR_HELP = "Press any key to return"
LIST_HELP = "↑/↓ to navigate • Enter to select • Esc to go back"


@dataclass(frozen=True)
class ScreenText:
    """Fixed text of one screen.

    Attributes:
        title: Heading line
        subtitle: Line under the heading
        help_text: Key hints shown at the bottom
        common_reasons: Hints listed under the error on error screens
    """

    title: str
    subtitle: str
    help_text: str
    common_reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScreenContent:
    title: str
    subtitle: str
    body: tuple[str, ...]
    help_text: str
    input_text: str | None
    input_is_placeholder: bool
    error: str | None


SCREENS: dict[SettingsState, ScreenText] = {
    SettingsState.MAIN_MENU: ScreenText(
        "⚙️  Settings", "Current Configuration", "↑/↓ to navigate • Enter to select • Esc to exit"
    ),
    SettingsState.REPOSITORY_ACTIONS: ScreenText(
        "⚙️  Modify Repository", "Choose what to change", LIST_HELP
    ),
    SettingsState.ADD_TYPE: ScreenText(
        "➕ Add New Repository", "What kind of repository?", LIST_HELP
    ),
    SettingsState.COMPLETE: ScreenText(
        "✅ Settings Updated", "Your changes have been saved", "Press any key to continue"
    ),
    SettingsState.ADD_LOCAL_NAME: ScreenText(
        "📁 Add Local Repository", "Enter a name for this repository", INPUT_HELP
    ),
    SettingsState.ADD_LOCAL_PATH: ScreenText(
        "📁 Add Local Repository", "Enter the local directory path", "Enter to save • Esc to go back"
    ),
    SettingsState.ADD_LOCAL_ERROR: ScreenText(
        "❌ Failed to Add Local Repository",
        "Cannot create repository",
        ERROR_HELP,
        ("Invalid or inaccessible path", "Duplicate repository name or path", "Permission issues"),
    ),
    SettingsState.ADD_REMOTE_NAME: ScreenText(
        "🌐 Add Remote Repository", "Enter a name for this repository", INPUT_HELP
    ),
    SettingsState.ADD_REMOTE_URL: ScreenText(
        "🌐 Add Remote Repository", "Enter the repository URL", INPUT_HELP
    ),
    SettingsState.ADD_REMOTE_BRANCH: ScreenText(
        "🌐 Add Remote Repository",
        "Which branch should we use? (optional)",
        INPUT_HELP + " • Leave empty for default branch",
    ),
    SettingsState.ADD_REMOTE_PATH: ScreenText(
        "🌐 Add Remote Repository",
        "Where should we clone the repository locally?",
        INPUT_HELP + " • Leave empty for the suggested path",
    ),
    SettingsState.ADD_REMOTE_PAT: ScreenText(
        "🔑 Access Token Required",
        "Enter a personal access token for this remote",
        INPUT_HELP,
    ),
    SettingsState.ADD_REMOTE_ERROR: ScreenText(
        "❌ Failed to Add Remote Repository",
        "Cannot create repository",
        ERROR_HELP,
        (
            "Network connectivity issues",
            "Invalid or expired access token",
            "Repository not found or access denied",
            "Duplicate repository name, URL or path",
        ),
    ),
    SettingsState.UPDATE_NAME: ScreenText(
        "✏️  Change Repository Name", "Enter the new name", EDIT_HELP
    ),
    SettingsState.EDIT_NAME_CONFIRM: ScreenText(
        "✏️  Confirm Name Change", "Review your changes", CONFIRM_HELP
    ),
    SettingsState.EDIT_NAME_ERROR: ScreenText(
        "❌ Name Update Failed",
        "Cannot change repository name",
        ERROR_HELP,
        ("Name is empty or too long", "Another repository already uses this name"),
    ),
    SettingsState.UPDATE_BRANCH: ScreenText(
        "🌿 Update Branch", "Enter the branch name", EDIT_HELP
    ),
    SettingsState.EDIT_BRANCH_CONFIRM: ScreenText(
        "🌿 Confirm Branch Change", "Review your changes", CONFIRM_HELP
    ),
    SettingsState.EDIT_BRANCH_ERROR: ScreenText(
        "❌ Branch Update Failed",
        "Cannot change branch",
        ERROR_HELP,
        (
            "Local repository has uncommitted changes",
            "Branch does not exist on the remote",
            "Invalid branch name",
        ),
    ),
    SettingsState.UPDATE_CLONE_PATH: ScreenText(
        "📂 Update Clone Path", "Enter where to clone the repository", EDIT_HELP
    ),
    SettingsState.EDIT_CLONE_PATH_CONFIRM: ScreenText(
        "📂 Confirm Clone Path Change", "Review your changes", CONFIRM_HELP
    ),
    SettingsState.EDIT_CLONE_PATH_ERROR: ScreenText(
        "❌ Clone Path Update Failed",
        "Cannot change clone path",
        ERROR_HELP,
        (
            "Local repository has uncommitted changes",
            "Path is invalid or already used",
            "Permission issues",
        ),
    ),
    SettingsState.CONFIRM_DELETE: ScreenText(
        "⚠️  Confirm Repository Deletion",
        "This action cannot be undone",
        "y to confirm deletion • n/Esc to cancel",
    ),
    SettingsState.DELETE_ERROR: ScreenText(
        "❌ Deletion Failed",
        "Cannot delete repository",
        ERROR_HELP,
        ("Repository not found", "Failed to save configuration"),
    ),
    SettingsState.MANUAL_REFRESH: ScreenText(
        "🔄 Manual Refresh",
        "Pull latest changes from the remote",
        "Enter/y to confirm • n/Esc to cancel",
    ),
    SettingsState.REFRESH_IN_PROGRESS: ScreenText(
        "🔄 Refreshing...", "Pulling changes from the remote", "Please wait"
    ),
    SettingsState.REFRESH_ERROR: ScreenText(
        "❌ Refresh Failed",
        "Cannot refresh repository",
        ERROR_HELP,
        (
            "Network connectivity issues",
            "Invalid or expired access token",
            "Local repository has uncommitted changes",
            "Repository not found or access denied",
        ),
    ),
    SettingsState.UPDATE_PAT: ScreenText(
        "🔑 Update Credential", "Enter your personal access token", EDIT_HELP
    ),
    SettingsState.UPDATE_PAT_CONFIRM: ScreenText(
        "🔑 Confirm Credential Update",
        "The token was accepted by every remote repository",
        CONFIRM_HELP,
    ),
    SettingsState.UPDATE_PAT_ERROR: ScreenText(
        "❌ Credential Update Failed",
        "Cannot update access token",
        ERROR_HELP,
        (
            "Token is empty or has an unknown prefix",
            "Token is invalid or expired",
            "Token lacks access to a configured repository",
        ),
    ),
}


def render(model: SettingsModel) -> ScreenContent:
    text = SCREENS[model.state]
    state = model.state
    if state.is_error:
        body = _error_body(model, text)
        error = None
    else:
        body = _body(model)
        error = model.error.message

    title = text.title
    if state == SettingsState.ADD_LOCAL_PATH and model.scratch.add_local.name:
        title = f"{title}: {model.scratch.add_local.name}"
    elif state == SettingsState.ADD_REMOTE_URL and model.scratch.add_remote.name:
        title = f"{title}: {model.scratch.add_remote.name}"

    show_input = state in INPUT_STATES
    return ScreenContent(
        title=title,
        subtitle=text.subtitle,
        body=body,
        help_text=text.help_text,
        input_text=model.input.display_text() if show_input else None,
        input_is_placeholder=show_input and model.input.showing_placeholder,
        error=error,
    )


def _error_body(model: SettingsModel, text: ScreenText) -> tuple[str, ...]:
    lines = [f"• {model.error.message or 'Unknown error occurred'}", ""]
    if text.common_reasons:
        lines.append("💡 Common reasons:")
        lines.extend(f"  - {reason}" for reason in text.common_reasons)
    return tuple(lines)


def _list(labels: list[str], cursor: int) -> list[str]:
    return [
        f"{CURSOR} {label}" if index == cursor else f"  {label}"
        for index, label in enumerate(labels)
    ]


def _describe(entry: RepositoryEntry) -> list[str]:
    lines = [
        f"Name: {entry.name}",
        f"Type: {entry.kind.value}",
        f"Path: {entry.path}",
    ]
    if entry.is_remote:
        lines.append(f"URL: {entry.remote_url}")
        lines.append(f"Branch: {entry.branch or '(default)'}")
        if entry.last_sync_time is not None:
            synced = datetime.fromtimestamp(entry.last_sync_time, tz=UTC)
            lines.append(f"Last sync: {synced:%Y-%m-%d %H:%M:%S} UTC")
        else:
            lines.append("Last sync: never")
    return lines


def _change(label: str, before: str, after: str) -> list[str]:
    return [f"{label}:", f"  From: {before}", f"  To:   {after}"]


def _body(model: SettingsModel) -> tuple[str, ...]:
    state = model.state
    entry = model.selected_repository()
    lines: list[str] = []

    if state == SettingsState.MAIN_MENU:
        if not model.config.repositories:
            lines.extend(["No repositories configured yet.", ""])
        lines.extend(_list([item.label for item in main_menu_items(model.config)], model.cursor))
    elif state == SettingsState.REPOSITORY_ACTIONS:
        if entry is not None:
            lines.extend(_describe(entry))
            lines.append("")
        lines.extend(_list([action.value for action in repository_actions(entry)], model.cursor))
    elif state == SettingsState.ADD_TYPE:
        lines.extend(_list([add_type.value for add_type in ADD_TYPES], model.cursor))
    elif state == SettingsState.EDIT_NAME_CONFIRM and entry is not None:
        lines.extend(_change("Name", entry.name, model.scratch.edit_name.new_name))
    elif state == SettingsState.EDIT_BRANCH_CONFIRM and entry is not None:
        lines.extend(
            _change(
                "Branch",
                entry.branch or "(default)",
                model.scratch.edit_branch.new_branch or "(default)",
            )
        )
    elif state == SettingsState.EDIT_CLONE_PATH_CONFIRM and entry is not None:
        lines.extend(_change("Clone path", entry.path, model.scratch.edit_clone_path.new_path))
        lines.extend(["", "Files are not moved; the repository is used from the new path."])
    elif state == SettingsState.CONFIRM_DELETE and entry is not None:
        lines.extend(_describe(entry))
        lines.extend(["", "The entry is removed from the configuration.", "Files on disk are kept."])
    elif state == SettingsState.MANUAL_REFRESH and entry is not None:
        lines.append(f"Fetch the latest changes for '{entry.name}'?")
    elif state == SettingsState.REFRESH_IN_PROGRESS and entry is not None:
        lines.append(f"Fetching {entry.remote_url} ...")
    elif state == SettingsState.UPDATE_PAT_CONFIRM:
        lines.append("Store the new token in the credential helper?")
    elif state in (SettingsState.UPDATE_BRANCH, SettingsState.UPDATE_CLONE_PATH) and entry:
        lines.append(f"Repository: {entry.name}")
    return tuple(lines)
