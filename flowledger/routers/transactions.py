from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from flowledger.dependencies import get_caller, get_ledger
from flowledger.exceptions import AlreadyExists, NotFound, Unauthorized
from flowledger.schemas.requests import RecordRequest, FlagRequest
from flowledger.schemas.responses import TransactionResponse
from flowledger.services.ledger import Ledger

router = APIRouter()


def _now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


@router.post("", response_model=TransactionResponse, status_code=201)
def record(
    request: RecordRequest,
    caller: str = Depends(get_caller),
    ledger: Ledger = Depends(get_ledger),
):
    """
    Record a new transaction between two parties.

    - Caller (X-Caller header) must be an authorized writer
    - transaction_id must never have been used before
    - Appends the id to both the sender's and the receiver's index
    """
    try:
        txn = ledger.record(
            caller,
            request.transaction_id,
            request.sender,
            request.receiver,
            request.amount,
            _now(),
        )
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError:
        ledger.db.rollback()
        raise HTTPException(status_code=500, detail="Transaction recording failed: Database error")

    return TransactionResponse.model_validate(txn)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(transaction_id: str, ledger: Ledger = Depends(get_ledger)):
    """
    Look up a transaction. Unknown ids return the zero-valued record
    with exists=false instead of a 404.
    """
    return TransactionResponse.model_validate(ledger.get(transaction_id))


@router.post("/{transaction_id}/flag", response_model=TransactionResponse)
def flag(
    transaction_id: str,
    request: FlagRequest,
    caller: str = Depends(get_caller),
    ledger: Ledger = Depends(get_ledger),
):
    """Mark a recorded transaction as suspicious. Re-flagging replaces the reason."""
    try:
        txn = ledger.flag(caller, transaction_id, request.reason)
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SQLAlchemyError:
        ledger.db.rollback()
        raise HTTPException(status_code=500, detail="Flagging failed: Database error")

    return TransactionResponse.model_validate(txn)
