from fastapi import APIRouter, Depends, Query

from flowledger.dependencies import get_ledger
from flowledger.schemas.responses import FlaggedTransactions, TransactionResponse
from flowledger.services.ledger import Ledger

router = APIRouter()


@router.get("/flagged-transactions", response_model=FlaggedTransactions)
def flagged_transactions(
    limit: int = Query(100, ge=1, le=1000),
    ledger: Ledger = Depends(get_ledger),
):
    """Flagged transactions for compliance review, newest first."""
    transactions = ledger.list_flagged(limit)
    return FlaggedTransactions(
        count=len(transactions),
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
    )
