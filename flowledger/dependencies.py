from fastapi import Depends, Header
from sqlalchemy.orm import Session

from flowledger.config import LEDGER_WRITERS
from flowledger.database import get_db
from flowledger.services.authorization import AllowListAuthorizer, Authorizer
from flowledger.services.kyc import KycRegistry
from flowledger.services.ledger import Ledger
from flowledger.services.notifier import BaseNotifier, LoggingNotifier

_authorizer = AllowListAuthorizer(LEDGER_WRITERS)
_notifier = LoggingNotifier()


def get_authorizer() -> Authorizer:
    return _authorizer


def get_notifier() -> BaseNotifier:
    return _notifier


def get_caller(x_caller: str = Header(default="")) -> str:
    return x_caller.strip()


def get_ledger(
    db: Session = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
    notifier: BaseNotifier = Depends(get_notifier),
) -> Ledger:
    return Ledger(db, authorizer, notifier)


def get_kyc_registry(
    db: Session = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
    notifier: BaseNotifier = Depends(get_notifier),
) -> KycRegistry:
    return KycRegistry(db, authorizer, notifier)
