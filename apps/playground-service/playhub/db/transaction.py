"""
Transaction coordinator.

Groups a fixed sequence of repository and synchronizer calls into one session:
begin, run the steps, commit. Any failure aborts the session before it is
re-raised as a typed ``StoreError``; the session is closed on every exit path.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from playhub.db.database import DataSource
from playhub.errors import translate_store_error

logger = logging.getLogger(__name__)


class TransactionCoordinator:
    """Opens one session per unit of work against a data source."""

    def __init__(self, source: DataSource):
        self.source = source

    @contextmanager
    def session(self, label: str) -> Iterator[Session]:
        db = self.source.session_factory()
        logger.debug("transaction_begin: %s", label)
        try:
            yield db
            db.commit()
            logger.debug("transaction_commit: %s", label)
        except Exception as exc:
            db.rollback()
            err = translate_store_error(exc)
            logger.warning("transaction_abort: %s kind=%s error=%s", label, getattr(err, "kind", type(err).__name__), err)
            if err is exc:
                raise
            raise err from exc
        finally:
            db.close()

