"""
Database-backed aggregation lock.
A row in invoice_generation_locks marks an in-flight invoice generation for
one (engagement, period) key; the unique constraint rejects a second one.
"""

import logging
from datetime import date
from typing import Set, Tuple

from sqlalchemy import delete, event, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from consultdesk.domain.models.base import ConcurrentAggregationConflict
from consultdesk.domain.repositories.aggregation_lock import AggregationLock
from consultdesk.infrastructure.db.models import InvoiceGenerationLockModel


logger = logging.getLogger(__name__)

LockKey = Tuple[int, date, date]

_locks = InvoiceGenerationLockModel.__table__


class SQLAlchemyAggregationLock(AggregationLock):
    """
    Lock rows are written and removed on their own connection and committed
    at once, so other requests see them while the caller's transaction is
    still open.

    A key released inside an open transaction stays locked until that
    transaction commits or rolls back. Until then the invoice it guards is
    not visible to anyone else.
    """

    def __init__(self, session: Session):
        self.session = session
        self._pending: Set[LockKey] = set()
        self._listening = False

    def acquire(self, engagement_id: int, period_start: date, period_end: date) -> None:
        try:
            with self.session.get_bind().begin() as connection:
                connection.execute(insert(_locks).values(
                    engagement_id=engagement_id,
                    period_start=period_start,
                    period_end=period_end,
                ))
        except IntegrityError:
            logger.warning(
                f"Invoice generation already in progress for engagement {engagement_id} "
                f"({period_start} - {period_end})"
            )
            raise ConcurrentAggregationConflict(engagement_id, period_start, period_end)

    def release(self, engagement_id: int, period_start: date, period_end: date) -> None:
        key = (engagement_id, period_start, period_end)
        if not self.session.in_transaction():
            self._delete(key)
            return

        self._pending.add(key)
        if not self._listening:
            event.listen(self.session, "after_transaction_end", self._on_transaction_end)
            self._listening = True

    def _on_transaction_end(self, session: Session, transaction: SessionTransaction) -> None:
        if transaction.parent is not None or not self._pending:
            return

        pending, self._pending = self._pending, set()
        for key in pending:
            try:
                self._delete(key)
            except SQLAlchemyError:
                # the row stays until `manage_db.py clear-locks`
                logger.exception(f"Could not release invoice generation lock {key}")

    def _delete(self, key: LockKey) -> None:
        engagement_id, period_start, period_end = key
        with self.session.get_bind().begin() as connection:
            connection.execute(delete(_locks).where(
                _locks.c.engagement_id == engagement_id,
                _locks.c.period_start == period_start,
                _locks.c.period_end == period_end,
            ))
