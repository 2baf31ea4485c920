"""Study sets page: the study set grid and the folders of an open study set."""
from dataclasses import dataclass, field
from typing import List, Optional

from models import Folder, StudySet


@dataclass
class CreateEditState:
    id: Optional[int] = None
    name: str = ""


# --- Messages ---
class Message:
    pass


@dataclass
class Load(Message):
    pass


@dataclass
class SetStudySets(Message):
    studysets: List[StudySet]


@dataclass
class SetFolders(Message):
    folders: List[Folder]


@dataclass
class ToggleCreateStudySetPage(Message):
    studyset: Optional[StudySet] = None


@dataclass
class StudySetNameInput(Message):
    value: str


@dataclass
class UpsertStudySet(Message):
    pass


@dataclass
class StudySetUpserted(Message):
    pass


@dataclass
class DeleteStudySet(Message):
    studyset_id: Optional[int]


@dataclass
class OpenStudySet(Message):
    studyset_id: int


@dataclass
class Back(Message):
    pass


@dataclass
class ToggleCreateFolderPage(Message):
    folder: Optional[Folder] = None


@dataclass
class FolderNameInput(Message):
    value: str


@dataclass
class UpsertFolder(Message):
    pass


@dataclass
class FolderUpserted(Message):
    pass


@dataclass
class DeleteFolder(Message):
    folder_id: Optional[int]


@dataclass
class OpenFolder(Message):
    folder_id: int


# --- Commands ---
class Command:
    pass


@dataclass
class LoadStudySets(Command):
    pass


@dataclass
class UpsertStudySetCommand(Command):
    studyset: StudySet


@dataclass
class DeleteStudySetCommand(Command):
    studyset_id: Optional[int]


@dataclass
class ToggleCreateStudySetPageCommand(Command):
    studyset: Optional[StudySet]


@dataclass
class LoadFolders(Command):
    studyset_id: int


@dataclass
class UpsertFolderCommand(Command):
    folder: Folder
    studyset_id: int


@dataclass
class DeleteFolderCommand(Command):
    folder_id: Optional[int]


@dataclass
class ToggleCreateFolderPageCommand(Command):
    folder: Optional[Folder]


@dataclass
class OpenFolderCommand(Command):
    folder_id: int


@dataclass
class StudySets:
    studysets: List[StudySet] = field(default_factory=list)
    current_studyset_id: Optional[int] = None
    folders: List[Folder] = field(default_factory=list)
    new_edit_studyset: CreateEditState = field(default_factory=CreateEditState)
    new_edit_folder: CreateEditState = field(default_factory=CreateEditState)

    @property
    def current_studyset(self) -> Optional[StudySet]:
        for studyset in self.studysets:
            if studyset.id == self.current_studyset_id:
                return studyset
        return None

    def _load(self) -> Command:
        if self.current_studyset_id is None:
            return LoadStudySets()
        return LoadFolders(self.current_studyset_id)

    def update(self, message: Message) -> List[Command]:
        commands = []

        if isinstance(message, Load):
            commands.append(self._load())
        elif isinstance(message, SetStudySets):
            self.studysets = list(message.studysets)
        elif isinstance(message, SetFolders):
            self.folders = list(message.folders)

        # Study sets
        elif isinstance(message, ToggleCreateStudySetPage):
            studyset = message.studyset
            if studyset is None:
                self.new_edit_studyset = CreateEditState()
            else:
                self.new_edit_studyset = CreateEditState(id=studyset.id, name=studyset.name)
            commands.append(ToggleCreateStudySetPageCommand(studyset))
        elif isinstance(message, StudySetNameInput):
            self.new_edit_studyset.name = message.value
        elif isinstance(message, UpsertStudySet):
            form = self.new_edit_studyset
            if form.name.strip():
                commands.append(UpsertStudySetCommand(StudySet(id=form.id, name=form.name)))
        elif isinstance(message, StudySetUpserted):
            self.new_edit_studyset = CreateEditState()
            commands.append(LoadStudySets())
        elif isinstance(message, DeleteStudySet):
            commands.append(DeleteStudySetCommand(message.studyset_id))
        elif isinstance(message, OpenStudySet):
            self.current_studyset_id = message.studyset_id
            self.folders = []
            commands.append(LoadFolders(message.studyset_id))
        elif isinstance(message, Back):
            self.current_studyset_id = None
            self.folders = []
            commands.append(LoadStudySets())

        # Folders
        elif isinstance(message, ToggleCreateFolderPage):
            folder = message.folder
            if folder is None:
                self.new_edit_folder = CreateEditState()
            else:
                self.new_edit_folder = CreateEditState(id=folder.id, name=folder.name)
            commands.append(ToggleCreateFolderPageCommand(folder))
        elif isinstance(message, FolderNameInput):
            self.new_edit_folder.name = message.value
        elif isinstance(message, UpsertFolder):
            form = self.new_edit_folder
            if form.name.strip() and self.current_studyset_id is not None:
                commands.append(UpsertFolderCommand(
                    Folder(id=form.id, name=form.name),
                    self.current_studyset_id,
                ))
        elif isinstance(message, FolderUpserted):
            self.new_edit_folder = CreateEditState()
            commands.append(self._load())
        elif isinstance(message, DeleteFolder):
            commands.append(DeleteFolderCommand(message.folder_id))
        elif isinstance(message, OpenFolder):
            commands.append(OpenFolderCommand(message.folder_id))

        return commands
