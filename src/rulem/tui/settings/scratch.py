"""Per-flow staging records for input that has not been committed yet.

Each flow owns exactly one record type and replaces it wholesale with
dataclasses.replace; no flow reads another flow's record.
"""

from dataclasses import dataclass, field

from rulem.tui.settings.state import FlowRegion


@dataclass(frozen=True)
class AddLocalScratch:
    name: str = ""
    path: str = ""


@dataclass(frozen=True)
class AddRemoteScratch:
    name: str = ""
    url: str = ""
    branch: str = ""
    path: str = ""


@dataclass(frozen=True)
class EditNameScratch:
    new_name: str = ""


@dataclass(frozen=True)
class EditBranchScratch:
    new_branch: str = ""


@dataclass(frozen=True)
class EditClonePathScratch:
    new_path: str = ""


@dataclass(frozen=True)
class UpdateCredentialScratch:
    new_secret: str = ""


@dataclass
class ScratchSlots:
    """One scratch record per flow region."""

    add_local: AddLocalScratch = field(default_factory=AddLocalScratch)
    add_remote: AddRemoteScratch = field(default_factory=AddRemoteScratch)
    edit_name: EditNameScratch = field(default_factory=EditNameScratch)
    edit_branch: EditBranchScratch = field(default_factory=EditBranchScratch)
    edit_clone_path: EditClonePathScratch = field(default_factory=EditClonePathScratch)
    update_credential: UpdateCredentialScratch = field(default_factory=UpdateCredentialScratch)

    def reset(self, region: FlowRegion) -> None:
        """Empty the record owned by region; other records are untouched."""
        if region == FlowRegion.ADD_LOCAL:
            self.add_local = AddLocalScratch()
        elif region == FlowRegion.ADD_REMOTE:
            self.add_remote = AddRemoteScratch()
        elif region == FlowRegion.EDIT_NAME:
            self.edit_name = EditNameScratch()
        elif region == FlowRegion.EDIT_BRANCH:
            self.edit_branch = EditBranchScratch()
        elif region == FlowRegion.EDIT_CLONE_PATH:
            self.edit_clone_path = EditClonePathScratch()
        elif region == FlowRegion.UPDATE_CREDENTIAL:
            self.update_credential = UpdateCredentialScratch()
