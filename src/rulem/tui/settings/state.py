"""States of the settings menu and the flow region each belongs to."""

from enum import Enum, auto


class FlowRegion(Enum):
    """Group of states that share one scratch record.

    Leaving a region through the transition primitive resets that region's
    scratch record. MENU states own no scratch.
    """

    MENU = auto()
    ADD_LOCAL = auto()
    ADD_REMOTE = auto()
    EDIT_NAME = auto()
    EDIT_BRANCH = auto()
    EDIT_CLONE_PATH = auto()
    DELETE = auto()
    REFRESH = auto()
    UPDATE_CREDENTIAL = auto()


class SettingsState(Enum):
    """Every screen the settings menu can show.

    The value is the display name used in logs.
    """

    MAIN_MENU = "MainMenu"
    REPOSITORY_ACTIONS = "RepositoryActions"
    UPDATE_PAT = "UpdatePAT"
    UPDATE_PAT_CONFIRM = "UpdatePATConfirm"
    UPDATE_PAT_ERROR = "UpdatePATError"
    ADD_TYPE = "AddType"
    ADD_LOCAL_NAME = "AddLocalName"
    ADD_LOCAL_PATH = "AddLocalPath"
    ADD_LOCAL_ERROR = "AddLocalError"
    ADD_REMOTE_NAME = "AddRemoteName"
    ADD_REMOTE_URL = "AddRemoteURL"
    ADD_REMOTE_BRANCH = "AddRemoteBranch"
    ADD_REMOTE_PATH = "AddRemotePath"
    ADD_REMOTE_PAT = "AddRemotePAT"
    ADD_REMOTE_ERROR = "AddRemoteError"
    UPDATE_NAME = "UpdateName"
    EDIT_NAME_CONFIRM = "EditNameConfirm"
    EDIT_NAME_ERROR = "EditNameError"
    UPDATE_BRANCH = "UpdateBranch"
    EDIT_BRANCH_CONFIRM = "EditBranchConfirm"
    EDIT_BRANCH_ERROR = "EditBranchError"
    UPDATE_CLONE_PATH = "UpdateClonePath"
    EDIT_CLONE_PATH_CONFIRM = "EditClonePathConfirm"
    EDIT_CLONE_PATH_ERROR = "EditClonePathError"
    CONFIRM_DELETE = "ConfirmDelete"
    DELETE_ERROR = "DeleteError"
    MANUAL_REFRESH = "ManualRefresh"
    REFRESH_IN_PROGRESS = "RefreshInProgress"
    REFRESH_ERROR = "RefreshError"
    COMPLETE = "Complete"

    @property
    def region(self) -> FlowRegion:
        return STATE_REGIONS[self]

    @property
    def is_error(self) -> bool:
        return self in ERROR_STATES


STATE_REGIONS: dict[SettingsState, FlowRegion] = {
    SettingsState.MAIN_MENU: FlowRegion.MENU,
    SettingsState.REPOSITORY_ACTIONS: FlowRegion.MENU,
    SettingsState.ADD_TYPE: FlowRegion.MENU,
    SettingsState.COMPLETE: FlowRegion.MENU,
    SettingsState.UPDATE_PAT: FlowRegion.UPDATE_CREDENTIAL,
    SettingsState.UPDATE_PAT_CONFIRM: FlowRegion.UPDATE_CREDENTIAL,
    SettingsState.UPDATE_PAT_ERROR: FlowRegion.UPDATE_CREDENTIAL,
    SettingsState.ADD_LOCAL_NAME: FlowRegion.ADD_LOCAL,
    SettingsState.ADD_LOCAL_PATH: FlowRegion.ADD_LOCAL,
    SettingsState.ADD_LOCAL_ERROR: FlowRegion.ADD_LOCAL,
    SettingsState.ADD_REMOTE_NAME: FlowRegion.ADD_REMOTE,
    SettingsState.ADD_REMOTE_URL: FlowRegion.ADD_REMOTE,
    SettingsState.ADD_REMOTE_BRANCH: FlowRegion.ADD_REMOTE,
    SettingsState.ADD_REMOTE_PATH: FlowRegion.ADD_REMOTE,
    SettingsState.ADD_REMOTE_PAT: FlowRegion.ADD_REMOTE,
    SettingsState.ADD_REMOTE_ERROR: FlowRegion.ADD_REMOTE,
    SettingsState.UPDATE_NAME: FlowRegion.EDIT_NAME,
    SettingsState.EDIT_NAME_CONFIRM: FlowRegion.EDIT_NAME,
    SettingsState.EDIT_NAME_ERROR: FlowRegion.EDIT_NAME,
    SettingsState.UPDATE_BRANCH: FlowRegion.EDIT_BRANCH,
    SettingsState.EDIT_BRANCH_CONFIRM: FlowRegion.EDIT_BRANCH,
    SettingsState.EDIT_BRANCH_ERROR: FlowRegion.EDIT_BRANCH,
    SettingsState.UPDATE_CLONE_PATH: FlowRegion.EDIT_CLONE_PATH,
    SettingsState.EDIT_CLONE_PATH_CONFIRM: FlowRegion.EDIT_CLONE_PATH,
    SettingsState.EDIT_CLONE_PATH_ERROR: FlowRegion.EDIT_CLONE_PATH,
    SettingsState.CONFIRM_DELETE: FlowRegion.DELETE,
    SettingsState.DELETE_ERROR: FlowRegion.DELETE,
    SettingsState.MANUAL_REFRESH: FlowRegion.REFRESH,
    SettingsState.REFRESH_IN_PROGRESS: FlowRegion.REFRESH,
    SettingsState.REFRESH_ERROR: FlowRegion.REFRESH,
}

ERROR_STATES = frozenset(
    {
        SettingsState.UPDATE_PAT_ERROR,
        SettingsState.ADD_LOCAL_ERROR,
        SettingsState.ADD_REMOTE_ERROR,
        SettingsState.EDIT_NAME_ERROR,
        SettingsState.EDIT_BRANCH_ERROR,
        SettingsState.EDIT_CLONE_PATH_ERROR,
        SettingsState.DELETE_ERROR,
        SettingsState.REFRESH_ERROR,
    }
)

# States that show the shared text input and feed it keystrokes.
INPUT_STATES = frozenset(
    {
        SettingsState.UPDATE_PAT,
        SettingsState.ADD_LOCAL_NAME,
        SettingsState.ADD_LOCAL_PATH,
        SettingsState.ADD_REMOTE_NAME,
        SettingsState.ADD_REMOTE_URL,
        SettingsState.ADD_REMOTE_BRANCH,
        SettingsState.ADD_REMOTE_PATH,
        SettingsState.ADD_REMOTE_PAT,
        SettingsState.UPDATE_NAME,
        SettingsState.UPDATE_BRANCH,
        SettingsState.UPDATE_CLONE_PATH,
    }
)

# Non-error states that act on the selected repository.
SELECTION_STATES = frozenset(
    {
        SettingsState.REPOSITORY_ACTIONS,
        SettingsState.UPDATE_NAME,
        SettingsState.EDIT_NAME_CONFIRM,
        SettingsState.UPDATE_BRANCH,
        SettingsState.EDIT_BRANCH_CONFIRM,
        SettingsState.UPDATE_CLONE_PATH,
        SettingsState.EDIT_CLONE_PATH_CONFIRM,
        SettingsState.CONFIRM_DELETE,
        SettingsState.MANUAL_REFRESH,
        SettingsState.REFRESH_IN_PROGRESS,
    }
)


class ExitReason(Enum):
    """Why the settings menu stopped."""

    QUIT = "quit"
    BACK_TO_PARENT = "back"
