"""KYC tag registry: one free-text classification tag per party."""
import logging
import time

from sqlalchemy.orm import Session

from flowledger import models
from flowledger.exceptions import Unauthorized
from flowledger.services.authorization import Authorizer
from flowledger.services.ledger import LEDGER_LOCK
from flowledger.services.notifier import BaseNotifier, KycUpdated, emit

logger = logging.getLogger(__name__)


class KycRegistry:
    def __init__(self, db: Session, authorizer: Authorizer, notifier: BaseNotifier):
        self.db = db
        self.authorizer = authorizer
        self.notifier = notifier

    def set_tag(self, caller: str, party: str, tag: str) -> None:
        with LEDGER_LOCK:
            if not self.authorizer(caller):
                logger.warning(f"REJECTED kyc tag: caller={caller!r} is not an authorized writer")
                raise Unauthorized(caller)

            row = self.db.get(models.KycTag, party)
            if row is None:
                row = models.KycTag(party=party)
                self.db.add(row)
            row.tag = tag
            row.updated_at = int(time.time())
            self.db.commit()

            logger.info(f"KYC TAG SET: party={party}, tag={tag!r}")
            emit(self.notifier, KycUpdated(party=party, tag=tag))

    def get_tag(self, party: str) -> str:
        with LEDGER_LOCK:
            row = self.db.get(models.KycTag, party)
        return row.tag if row is not None else ""
