"""
Ledger store service.

Owns every read and write of transaction records and the per-party index:
- record: insert a new transaction and append its id to the sender's and
  receiver's index (sender entry first)
- get: point lookup, returning a zero-valued record for unknown ids
- flag: mark an existing transaction as suspicious with a reason
- transactions_of / sent_by: per-party index queries

Writes are gated by an injected authorizer and announced through an injected
notifier. All operations run under LEDGER_LOCK, so concurrent request
threads see writes in a single serial order. Events are published before
the lock is released, so the sink receives them in commit order.
"""
import logging
import threading
from typing import List

from sqlalchemy.orm import Session

from flowledger import models
from flowledger.exceptions import AlreadyExists, NotFound, Unauthorized
from flowledger.services.authorization import Authorizer
from flowledger.services.notifier import BaseNotifier, Flagged, Recorded, emit

logger = logging.getLogger(__name__)

LEDGER_LOCK = threading.RLock()


class Ledger:
    def __init__(self, db: Session, authorizer: Authorizer, notifier: BaseNotifier):
        self.db = db
        self.authorizer = authorizer
        self.notifier = notifier

    def _require_writer(self, caller: str, action: str):
        if not self.authorizer(caller):
            logger.warning(f"REJECTED {action}: caller={caller!r} is not an authorized writer")
            raise Unauthorized(caller)

    def _load(self, transaction_id: str):
        txn = self.db.get(models.Transaction, transaction_id)
        if txn is None or not txn.created_at:
            return None
        return txn

    def record(
        self,
        caller: str,
        transaction_id: str,
        sender: str,
        receiver: str,
        amount: int,
        now: int,
    ) -> models.Transaction:
        """
        Record a new transaction.

        Raises:
            Unauthorized: caller is not an authorized writer
            AlreadyExists: a transaction with this id was already recorded
            ValueError: negative amount or non-positive timestamp
        """
        with LEDGER_LOCK:
            self._require_writer(caller, "record")

            if self._load(transaction_id) is not None:
                logger.warning(f"REJECTED record: transaction {transaction_id} already exists")
                raise AlreadyExists(transaction_id)
            if amount < 0:
                raise ValueError(f"Amount must be non-negative, got {amount}")
            if now <= 0:
                raise ValueError(f"Timestamp must be positive, got {now}")

            txn = models.Transaction(
                id=transaction_id,
                sender=sender,
                receiver=receiver,
                amount=amount,
                created_at=now,
                flagged=False,
                flag_reason="",
            )
            self.db.add(txn)
            self.db.flush()

            self.db.add(models.PartyTransaction(party=sender, transaction_id=transaction_id))
            self.db.flush()
            self.db.add(models.PartyTransaction(party=receiver, transaction_id=transaction_id))
            self.db.commit()
            self.db.refresh(txn)

            logger.info(
                f"RECORDED: id={transaction_id}, sender={sender}, receiver={receiver}, amount={amount}"
            )

            emit(self.notifier, Recorded(
                id=transaction_id,
                sender=sender,
                receiver=receiver,
                amount=amount,
                timestamp=now,
            ))
        return txn

    def get(self, transaction_id: str) -> models.Transaction:
        with LEDGER_LOCK:
            txn = self._load(transaction_id)
        return txn if txn is not None else models.empty_transaction()

    def flag(self, caller: str, transaction_id: str, reason: str) -> models.Transaction:
        """
        Flag a recorded transaction. Re-flagging overwrites the previous reason.

        Raises:
            Unauthorized: caller is not an authorized writer
            NotFound: the transaction was never recorded
        """
        with LEDGER_LOCK:
            self._require_writer(caller, "flag")

            txn = self._load(transaction_id)
            if txn is None:
                raise NotFound(transaction_id)

            txn.flagged = True
            txn.flag_reason = reason
            self.db.commit()
            self.db.refresh(txn)

            logger.warning(f"FLAGGED: id={transaction_id}, reason={reason!r}")
            emit(self.notifier, Flagged(id=transaction_id, reason=reason))
        return txn

    def transactions_of(self, party: str) -> List[str]:
        with LEDGER_LOCK:
            rows = self.db.query(models.PartyTransaction.transaction_id).filter(
                models.PartyTransaction.party == party
            ).order_by(models.PartyTransaction.seq).all()
        return [row.transaction_id for row in rows]

    def sent_by(self, party: str) -> List[str]:
        """Ids from the party's index where the party is the sender, in index order."""
        with LEDGER_LOCK:
            return [
                transaction_id
                for transaction_id in self.transactions_of(party)
                if self.get(transaction_id).sender == party
            ]

    def list_flagged(self, limit: int = 100) -> List[models.Transaction]:
        with LEDGER_LOCK:
            return self.db.query(models.Transaction).filter(
                models.Transaction.flagged.is_(True),
                models.Transaction.created_at != 0,
            ).order_by(
                models.Transaction.created_at.desc(),
                models.Transaction.id,
            ).limit(limit).all()
