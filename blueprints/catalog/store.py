"""Data-access handle for the catalog.

``CatalogStore`` is built once in ``create_app``, opened at startup and closed
at shutdown. Handlers look it up with :func:`get_store` and hand it to the
service functions, which never touch ``db.session`` directly.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Type

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import DuplicateEntity

log = logging.getLogger(__name__)

EXTENSION_KEY = "catalog_store"

UNIQUE_SQLSTATE = "23505"
MYSQL_DUP_ENTRY = 1062


def _is_unique_violation(ex: IntegrityError) -> bool:
    orig = ex.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate:
        return sqlstate == UNIQUE_SQLSTATE
    args = getattr(orig, "args", ()) or ()
    if args and args[0] == MYSQL_DUP_ENTRY:
        return True
    # sqlite: "UNIQUE constraint failed: major.major_code"
    return "unique constraint" in str(orig).lower()


class CatalogStore:
    def __init__(self, db: SQLAlchemy):
        self._db = db
        self._app: Optional[Flask] = None
        self._open = False

    # ---------- lifecycle ----------
    def init_app(self, app: Flask) -> None:
        self._app = app
        app.extensions[EXTENSION_KEY] = self

    def open(self) -> "CatalogStore":
        if self._app is None:
            raise RuntimeError("CatalogStore.init_app() must be called before open()")
        if self._app.config.get("CATALOG_AUTO_CREATE"):
            with self._app.app_context():
                self._db.create_all()
        self._open = True
        log.info("catalog store opened", extra={"event": "store_open"})
        return self

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        with self._app.app_context():
            self._db.session.remove()
            for engine in self._db.engines.values():
                engine.dispose()
        log.info("catalog store closed", extra={"event": "store_close"})

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def session(self) -> Session:
        if not self._open:
            raise RuntimeError("catalog store is closed")
        return self._db.session

    # ---------- reads ----------
    def get(self, model: Type[Any], pk: Any):
        return self.session.get(model, pk)

    def first(self, model: Type[Any], **criteria):
        return self.session.execute(select(model).filter_by(**criteria)).scalars().first()

    def all(self, model: Type[Any], *criteria, order_by=None) -> List[Any]:
        stmt = select(model)
        if criteria:
            stmt = stmt.where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        return list(self.session.execute(stmt).scalars().all())

    def ids(self, column, *criteria) -> List[Any]:
        stmt = select(column)
        if criteria:
            stmt = stmt.where(*criteria)
        return list(self.session.execute(stmt).scalars().all())

    # ---------- writes ----------
    @contextmanager
    def transaction(self, conflict: str = "Unique constraint violation") -> Iterator[Session]:
        """Commit everything done inside the block, or roll all of it back."""
        session = self.session
        try:
            yield session
            session.commit()
        except IntegrityError as ex:
            session.rollback()
            log.warning("integrity error: %s", ex.orig if ex.orig is not None else ex)
            if _is_unique_violation(ex):
                raise DuplicateEntity(conflict) from ex
            # FK / NOT NULL — не конфликт, уходит в общий 500
            raise
        except Exception:
            session.rollback()
            raise

    def add(self, obj, conflict: str = "Unique constraint violation"):
        with self.transaction(conflict) as session:
            session.add(obj)
        return obj

    def delete_where(self, model: Type[Any], *criteria) -> int:
        result = self.session.execute(delete(model).where(*criteria))
        return result.rowcount

    def update_where(self, model: Type[Any], *criteria, values: dict) -> int:
        result = self.session.execute(update(model).where(*criteria).values(**values))
        return result.rowcount


def get_store() -> CatalogStore:
    return current_app.extensions[EXTENSION_KEY]
