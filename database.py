import logging
from typing import List, Optional

import pyodbc

import config
from models import Flashcard, FlashcardStatus, Folder, StudySet
from utils import OboeteError

logger = logging.getLogger(__name__)


SCHEMA_STATEMENTS = [
    """
    IF OBJECT_ID('dbo.StudySets', 'U') IS NULL
    CREATE TABLE dbo.StudySets (
        StudySetID INT IDENTITY(1,1) PRIMARY KEY,
        Name NVARCHAR(255) NOT NULL
    )
    """,
    """
    IF OBJECT_ID('dbo.Folders', 'U') IS NULL
    CREATE TABLE dbo.Folders (
        FolderID INT IDENTITY(1,1) PRIMARY KEY,
        StudySetID INT NOT NULL
            REFERENCES dbo.StudySets (StudySetID) ON DELETE CASCADE,
        Name NVARCHAR(255) NOT NULL
    )
    """,
    """
    IF OBJECT_ID('dbo.Flashcards', 'U') IS NULL
    CREATE TABLE dbo.Flashcards (
        FlashcardID INT IDENTITY(1,1) PRIMARY KEY,
        FolderID INT NOT NULL
            REFERENCES dbo.Folders (FolderID) ON DELETE CASCADE,
        Front NVARCHAR(MAX) NOT NULL,
        Back NVARCHAR(MAX) NOT NULL,
        Status INT NOT NULL DEFAULT 0
    )
    """,
]


def ensure_database(server_conn_str: str, name: str):
    """Create database ``name`` through a connection to ``master`` if it is missing."""
    try:
        # CREATE DATABASE cannot run inside a transaction
        with pyodbc.connect(server_conn_str, autocommit=True) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT DB_ID(?)", (name,))
                row = cur.fetchone()
                if row is None or row[0] is None:
                    logger.info(f"Creating database {name}")
                    cur.execute(f"CREATE DATABASE [{name.replace(']', ']]')}]")
    except pyodbc.Error as e:
        logger.error(f"Could not create database {name}: {e}")
        raise OboeteError(str(e)) from e


class OboeteDb:
    """Study sets, folders and flashcards stored in SQL Server (LocalDB by default).

    Every call opens its own connection, so one instance can be shared by
    background tasks.
    """

    def __init__(self, conn_str: str):
        self.conn_str = conn_str

    @classmethod
    def init(cls, conn_str: Optional[str] = None) -> "OboeteDb":
        """Connect and create any missing tables.

        Without an explicit connection string the configured database is
        created first when the server does not have it yet.
        """
        if conn_str is None and not config.DB_CONN_STR:
            ensure_database(config.get_connection_string("master"), config.DB_CONFIG["database"])
        db = cls(conn_str or config.get_connection_string())
        db.ensure_schema()
        logger.info("Database ready")
        return db

    # --- Query helpers ---
    def _fetch_all(self, query, params=None):
        try:
            with pyodbc.connect(self.conn_str) as conn:
                with conn.cursor() as cur:
                    if params:
                        cur.execute(query, params)
                    else:
                        cur.execute(query)
                    return cur.fetchall()
        except pyodbc.Error as e:
            logger.error(f"Database error in fetch: {e}")
            raise OboeteError(str(e)) from e

    def _execute(self, query, params=None):
        try:
            with pyodbc.connect(self.conn_str) as conn:
                with conn.cursor() as cur:
                    if params:
                        cur.execute(query, params)
                    else:
                        cur.execute(query)
                    conn.commit()
        except pyodbc.Error as e:
            logger.error(f"Database error in execute: {e}")
            raise OboeteError(str(e)) from e

    def _insert_return_id(self, query, params) -> int:
        """Run an INSERT ... OUTPUT INSERTED.<id> and return the new id."""
        try:
            with pyodbc.connect(self.conn_str) as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    row = cur.fetchone()
                    conn.commit()
        except pyodbc.Error as e:
            logger.error(f"Database error in insert: {e}")
            raise OboeteError(str(e)) from e
        if not row:
            raise OboeteError("Insert did not return an id")
        return int(row[0])

    def ensure_schema(self):
        try:
            with pyodbc.connect(self.conn_str) as conn:
                with conn.cursor() as cur:
                    for statement in SCHEMA_STATEMENTS:
                        cur.execute(statement)
                    conn.commit()
        except pyodbc.Error as e:
            logger.error(f"Could not create schema: {e}")
            raise OboeteError(str(e)) from e

    # --- Study sets ---
    def get_all_studysets(self) -> List[StudySet]:
        """All study sets, each with its folders (folders without flashcards)."""
        studysets = [
            StudySet(id=int(row[0]), name=row[1])
            for row in self._fetch_all("SELECT StudySetID, Name FROM StudySets ORDER BY StudySetID")
        ]
        by_id = {studyset.id: studyset for studyset in studysets}
        for row in self._fetch_all("SELECT FolderID, StudySetID, Name FROM Folders ORDER BY FolderID"):
            owner = by_id.get(int(row[1]))
            if owner is not None:
                owner.folders.append(Folder(id=int(row[0]), name=row[2]))
        return studysets

    def upsert_studyset(self, studyset: StudySet) -> int:
        if studyset.id is None:
            return self._insert_return_id(
                "INSERT INTO StudySets (Name) OUTPUT INSERTED.StudySetID VALUES (?)",
                (studyset.name,),
            )
        self._execute("UPDATE StudySets SET Name = ? WHERE StudySetID = ?", (studyset.name, studyset.id))
        return studyset.id

    def delete_studyset(self, studyset_id: int):
        # Folders and flashcards go with it (ON DELETE CASCADE)
        self._execute("DELETE FROM StudySets WHERE StudySetID = ?", (studyset_id,))

    # --- Folders ---
    def get_studyset_folders(self, studyset_id: int) -> List[Folder]:
        rows = self._fetch_all(
            "SELECT FolderID, Name FROM Folders WHERE StudySetID = ? ORDER BY FolderID",
            (studyset_id,),
        )
        return [Folder(id=int(row[0]), name=row[1]) for row in rows]

    def upsert_folder(self, folder: Folder, studyset_id: Optional[int]) -> int:
        if folder.id is None:
            if studyset_id is None:
                raise OboeteError("A new folder needs a study set")
            return self._insert_return_id(
                "INSERT INTO Folders (StudySetID, Name) OUTPUT INSERTED.FolderID VALUES (?, ?)",
                (studyset_id, folder.name),
            )
        self._execute("UPDATE Folders SET Name = ? WHERE FolderID = ?", (folder.name, folder.id))
        return folder.id

    def delete_folder(self, folder_id: int):
        self._execute("DELETE FROM Folders WHERE FolderID = ?", (folder_id,))

    # --- Flashcards ---
    @staticmethod
    def _row_to_flashcard(row) -> Flashcard:
        status = row[3] if row[3] is not None else FlashcardStatus.NEW
        return Flashcard(id=int(row[0]), front=row[1], back=row[2], status=int(status))

    def get_folder_flashcards(self, folder_id: int) -> List[Flashcard]:
        rows = self._fetch_all(
            """
            SELECT FlashcardID, Front, Back, Status
            FROM Flashcards
            WHERE FolderID = ?
            ORDER BY FlashcardID
            """,
            (folder_id,),
        )
        return [self._row_to_flashcard(row) for row in rows]

    def get_all_flashcards(self) -> List[Flashcard]:
        rows = self._fetch_all("SELECT FlashcardID, Front, Back, Status FROM Flashcards ORDER BY FlashcardID")
        return [self._row_to_flashcard(row) for row in rows]

    def get_single_flashcard(self, flashcard_id: int) -> Flashcard:
        rows = self._fetch_all(
            "SELECT FlashcardID, Front, Back, Status FROM Flashcards WHERE FlashcardID = ?",
            (flashcard_id,),
        )
        if not rows:
            raise OboeteError(f"Flashcard {flashcard_id} not found")
        return self._row_to_flashcard(rows[0])

    def upsert_flashcard(self, flashcard: Flashcard, folder_id: Optional[int]) -> int:
        if flashcard.id is None:
            if folder_id is None:
                raise OboeteError("A new flashcard needs a folder")
            return self._insert_return_id(
                """
                INSERT INTO Flashcards (FolderID, Front, Back, Status)
                OUTPUT INSERTED.FlashcardID
                VALUES (?, ?, ?, ?)
                """,
                (folder_id, flashcard.front, flashcard.back, flashcard.status),
            )
        self._execute(
            "UPDATE Flashcards SET Front = ?, Back = ?, Status = ? WHERE FlashcardID = ?",
            (flashcard.front, flashcard.back, flashcard.status, flashcard.id),
        )
        return flashcard.id

    def update_flashcard_status(self, flashcard: Flashcard):
        if flashcard.id is None:
            raise OboeteError("Cannot update the status of an unsaved flashcard")
        self._execute(
            "UPDATE Flashcards SET Status = ? WHERE FlashcardID = ?",
            (flashcard.status, flashcard.id),
        )

    def delete_flashcard(self, flashcard_id: int):
        self._execute("DELETE FROM Flashcards WHERE FlashcardID = ?", (flashcard_id,))
