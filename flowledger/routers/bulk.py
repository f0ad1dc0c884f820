import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from flowledger.dependencies import get_caller, get_ledger
from flowledger.exceptions import LedgerError
from flowledger.schemas.requests import BulkRecordRequest, RecordRequest
from flowledger.schemas.responses import BulkRecordSummary, FailedRecord
from flowledger.services.ledger import Ledger

logger = logging.getLogger(__name__)

router = APIRouter()


def _record_one(ledger: Ledger, caller: str, item: RecordRequest, now: int):
    """Attempt to record one item; return (transaction_id_or_none, error_or_none)."""
    try:
        txn = ledger.record(caller, item.transaction_id, item.sender, item.receiver, item.amount, now)
        return txn.id, None
    except (LedgerError, ValueError) as e:
        return None, str(e)
    except SQLAlchemyError as e:
        ledger.db.rollback()
        logger.error(f"Database error recording {item.transaction_id}: {str(e)}")
        return None, "Database error"


@router.post("/bulk-record", response_model=BulkRecordSummary)
def bulk_record(
    request: BulkRecordRequest,
    caller: str = Depends(get_caller),
    ledger: Ledger = Depends(get_ledger),
):
    """
    Record up to 500 transactions in submission order.

    Partial failures are isolated: a duplicate id or a rejected write
    does not abort the rest of the batch.
    """
    start_ms = time.time() * 1000
    now = int(datetime.now(timezone.utc).timestamp())

    recorded_ids = []
    failed = []
    for item in request.transactions:
        transaction_id, error = _record_one(ledger, caller, item, now)
        if error:
            failed.append(FailedRecord(transaction_id=item.transaction_id, error=error))
            continue
        recorded_ids.append(transaction_id)

    elapsed_ms = int(time.time() * 1000 - start_ms)

    return BulkRecordSummary(
        total_submitted=len(request.transactions),
        recorded=len(recorded_ids),
        failed=len(failed),
        recorded_transaction_ids=recorded_ids,
        failed_transactions=failed,
        processing_time_ms=elapsed_ms,
    )
