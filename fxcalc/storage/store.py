"""Key-value store backends."""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fxcalc.storage.models import Base, Preference
from fxcalc.utils.errors import StorageError
from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text or None when absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlStore(KeyValueStore):
    """SQLite-backed store using the ``preferences`` table."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine: Engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # SQLite specific
            echo=echo,
        )
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

    @classmethod
    def from_path(cls, db_path: str, echo: bool = False) -> "SqlStore":
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Opening preference store: {db_path}")
        return cls(f"sqlite:///{db_path}", echo=echo)

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def get(self, key: str) -> Optional[str]:
        with self._session() as db:
            row = db.get(Preference, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session() as db:
            row = db.get(Preference, key)
            if row is None:
                db.add(Preference(key=key, value=value))
            else:
                row.value = value

    def delete(self, key: str) -> None:
        with self._session() as db:
            row = db.get(Preference, key)
            if row is not None:
                db.delete(row)

    def close(self) -> None:
        self.engine.dispose()
