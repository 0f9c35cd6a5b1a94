"""
Storage Stage - Persists extracted papers to SQLite.

All inserts of a batch share one connection and one transaction. The
orchestrator opens it with begin_batch() and ends it with commit_batch() or
rollback_batch(); insert_papers() never commits on its own.
"""

import logging
import os
import sqlite3
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..stage import PipelineStage
from ..pipeline_data import PipelineData
from ...errors import StorageError
from ...models import Conference, Paper, StoredPaper


@dataclass
class StorageConfig:
    """Configuration for storage stage."""
    database_path: str = "data/papers.sqlite"
    create_indexes: bool = True


DATABASE_PATH_ENV = "DATABASE_PATH"


def apply_database_env(config: StorageConfig) -> StorageConfig:
    """Override database_path from the DATABASE_PATH environment variable, if set."""
    database_path = os.environ.get(DATABASE_PATH_ENV)
    if database_path:
        logging.getLogger(__name__).info(
            f"Using database path from {DATABASE_PATH_ENV}: {database_path}"
        )
        config.database_path = database_path
    return config


SCHEMA = """
    CREATE TABLE IF NOT EXISTS papers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        conference_name TEXT NOT NULL,
        year INTEGER NOT NULL,
        title TEXT NOT NULL,
        url TEXT,
        authors TEXT,
        abstract_text TEXT,
        UNIQUE (conference_name, year, title, url, authors, abstract_text)
    )
"""

INSERT_PAPER = """
    INSERT OR IGNORE INTO papers
    (conference_name, year, title, url, authors, abstract_text)
    VALUES (?, ?, ?, ?, ?, ?)
"""


class SQLiteStorage:
    """SQLite database storage backend."""

    def __init__(self, config: StorageConfig):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

        if self.config.database_path != ":memory:":
            self._init_database()

    def _init_database(self):
        """Create the database file and schema."""
        directory = os.path.dirname(self.config.database_path)
        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create database directory {directory}: {e}") from e

        conn = self.connect()
        conn.close()

        self.logger.info(f"Database initialized at {self.config.database_path}")

    def _ensure_schema(self, conn: sqlite3.Connection):
        conn.execute(SCHEMA)
        if self.config.create_indexes:
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_papers_conference "
                "ON papers(conference_name, year)"
            )

    def connect(self) -> sqlite3.Connection:
        """
        Open a connection in autocommit mode with the schema in place.
        Transactions are started explicitly with begin().
        """
        try:
            conn = sqlite3.connect(self.config.database_path, isolation_level=None)
            conn.row_factory = sqlite3.Row
            self._ensure_schema(conn)
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        return conn

    def begin(self) -> sqlite3.Connection:
        """Open a connection and start a transaction on it."""
        conn = self.connect()
        try:
            conn.execute("BEGIN")
        except sqlite3.Error as e:
            conn.close()
            raise StorageError(str(e)) from e
        return conn

    def insert_papers(self, conn: sqlite3.Connection, papers: Sequence[Paper]) -> int:
        """
        Insert papers inside the caller's transaction, ignoring duplicates.

        Returns:
            Number of rows actually created
        """
        inserted_count = 0
        try:
            for paper in papers:
                cursor = conn.execute(INSERT_PAPER, (
                    paper.conference_name,
                    paper.year,
                    paper.title,
                    paper.source_url,
                    paper.authors,
                    paper.abstract_text,
                ))
                if cursor.rowcount > 0:
                    inserted_count += 1
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        return inserted_count

    def commit(self, conn: sqlite3.Connection):
        try:
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def rollback(self, conn: sqlite3.Connection):
        try:
            conn.rollback()
        except sqlite3.Error as e:
            self.logger.error(f"Rollback failed: {e}")
        finally:
            conn.close()

    def list_conferences(self) -> List[Conference]:
        """Distinct (conference, year) pairs, newest year first."""
        conn = self.connect()
        try:
            rows = conn.execute(
                "SELECT DISTINCT conference_name AS name, year FROM papers "
                "ORDER BY year DESC, name ASC"
            ).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()
        return [Conference(name=row['name'], year=row['year']) for row in rows]

    def get_papers(self, conference_name: Optional[str] = None,
                   year: Optional[int] = None) -> List[StoredPaper]:
        """Stored papers, optionally filtered by conference and year."""
        query = "SELECT * FROM papers WHERE 1 = 1"
        params: list = []
        if conference_name is not None:
            query += " AND conference_name = ?"
            params.append(conference_name)
        if year is not None:
            query += " AND year = ?"
            params.append(year)
        query += " ORDER BY id"

        conn = self.connect()
        try:
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

        return [
            StoredPaper(
                id=row['id'],
                conference_name=row['conference_name'],
                year=row['year'],
                title=row['title'],
                source_url=row['url'],
                authors=row['authors'],
                abstract_text=row['abstract_text'],
            )
            for row in rows
        ]

    def count_papers(self) -> int:
        conn = self.connect()
        try:
            return conn.execute("SELECT COUNT(*) FROM papers").fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()


class StorageStage(PipelineStage):
    """
    Stage 4: Storage.

    Responsibilities:
    - Own the batch connection and its transaction
    - Insert each page's papers, ignoring duplicates
    - Report how many rows were actually created
    """

    def __init__(self, config: StorageConfig, storage: Optional[SQLiteStorage] = None):
        super().__init__(name="Storage")
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

        self.storage = storage or SQLiteStorage(config)
        self.connection: Optional[sqlite3.Connection] = None

        self.stats = {
            'papers_submitted': 0,
            'papers_inserted': 0,
            'duplicates_ignored': 0,
        }

    def begin_batch(self):
        if self.connection is not None:
            raise StorageError("a batch transaction is already open")
        self.connection = self.storage.begin()
        self.logger.debug("Batch transaction started")

    def commit_batch(self):
        conn, self.connection = self._take_connection(), None
        self.storage.commit(conn)
        self.logger.info("Batch transaction committed")

    def rollback_batch(self):
        if self.connection is None:
            return
        conn, self.connection = self.connection, None
        self.storage.rollback(conn)
        self.logger.warning("Batch transaction rolled back")

    def _take_connection(self) -> sqlite3.Connection:
        if self.connection is None:
            raise StorageError("no batch transaction is open")
        return self.connection

    def process(self, data: PipelineData) -> PipelineData:
        conn = self._take_connection()
        inserted = self.storage.insert_papers(conn, data.papers)

        data.inserted_count = inserted
        self.stats['papers_submitted'] += len(data.papers)
        self.stats['papers_inserted'] += inserted
        self.stats['duplicates_ignored'] += len(data.papers) - inserted

        self.logger.info(f"Inserted {inserted} new papers from {data.url}")
        return data

    def get_stats(self) -> dict:
        base_stats = super().get_stats()
        base_stats['storage_stats'] = self.stats.copy()
        return base_stats
