from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import NotUnique
from extensions import db, write_lock

log = logging.getLogger(__name__)

@contextmanager
def atomic(action: str) -> Iterator[Session]:
    """Одна изменяющая операция: запись + пересчёт под общим замком и в одной транзакции.

    Любая ошибка внутри блока откатывает всё целиком, частичных изменений не бывает.
    """
    with write_lock:
        try:
            yield db.session
            db.session.commit()
        except IntegrityError as ex:
            db.session.rollback()
            log.warning("integrity error during %s: %s", action, getattr(ex, "orig", ex))
            raise NotUnique(f"Unique constraint violation during {action}") from ex
        except Exception:
            db.session.rollback()
            raise
    log.info("%s committed", action)
