"""
SQLite-backed key/value store.

Uses SQLAlchemy with a single table of JSON values keyed by string, so the
registry and notes repositories can run on either this or a JSON file.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from sqlalchemy import Column, DateTime, String, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from .errors import StoreError

Base = declarative_base()


class StoreEntry(Base):
    """One stored value."""

    __tablename__ = "store_entries"

    key = Column(String, primary_key=True)  # rms-available-roles, rms-notes-<id>
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


class SqliteStore:
    """Key/value store over the store_entries table."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        init_database(self.db_path)
        self.engine = create_engine(f"sqlite:///{self.db_path}")
        self.Session = sessionmaker(bind=self.engine)

    def get_item(self, key: str) -> Optional[str]:
        with self.Session() as session:
            try:
                entry = session.get(StoreEntry, key)
            except SQLAlchemyError as e:
                raise StoreError(f"Failed to read {key!r} from {self.db_path}: {e}") from e
            return entry.value if entry is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self.Session() as session:
            try:
                entry = session.get(StoreEntry, key)
                if entry is None:
                    session.add(StoreEntry(key=key, value=value))
                else:
                    entry.value = value
                    entry.updated_at = datetime.now()
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise StoreError(f"Failed to write {key!r} to {self.db_path}: {e}") from e

    def remove_item(self, key: str) -> None:
        with self.Session() as session:
            try:
                entry = session.get(StoreEntry, key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise StoreError(f"Failed to delete {key!r} from {self.db_path}: {e}") from e

    def keys(self) -> List[str]:
        with self.Session() as session:
            return [row.key for row in session.query(StoreEntry).order_by(StoreEntry.key).all()]

    def close(self) -> None:
        self.engine.dispose()
