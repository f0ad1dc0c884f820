from fastapi import APIRouter, Depends, HTTPException

from flowledger.dependencies import get_caller, get_kyc_registry, get_ledger
from flowledger.exceptions import Unauthorized
from flowledger.schemas.requests import KycTagRequest
from flowledger.schemas.responses import KycTagResponse, PartyTransactions, TraceResponse
from flowledger.services.kyc import KycRegistry
from flowledger.services.ledger import Ledger
from flowledger.services.tracer import MAX_TRACE_RESULTS, trace_flow

router = APIRouter()


@router.get("/{party}/transactions", response_model=PartyTransactions)
def transactions_of(party: str, ledger: Ledger = Depends(get_ledger)):
    """Every transaction the party took part in, as sender or receiver, in record order."""
    return PartyTransactions(party=party, transaction_ids=ledger.transactions_of(party))


@router.get("/{party}/sent", response_model=PartyTransactions)
def sent_by(party: str, ledger: Ledger = Depends(get_ledger)):
    return PartyTransactions(party=party, transaction_ids=ledger.sent_by(party))


@router.get("/{party}/trace", response_model=TraceResponse)
def trace(party: str, ledger: Ledger = Depends(get_ledger)):
    """
    Trace money flow out of a party.

    Depth-first over "sent to" edges, capped at 100 transactions.
    limit_reached is true when the cap cut the trace short.
    """
    ids = trace_flow(ledger, party)
    return TraceResponse(
        root=party,
        count=len(ids),
        limit=MAX_TRACE_RESULTS,
        limit_reached=len(ids) >= MAX_TRACE_RESULTS,
        transaction_ids=ids,
    )


@router.get("/{party}/kyc", response_model=KycTagResponse)
def get_kyc_tag(party: str, registry: KycRegistry = Depends(get_kyc_registry)):
    return KycTagResponse(party=party, tag=registry.get_tag(party))


@router.put("/{party}/kyc", response_model=KycTagResponse)
def set_kyc_tag(
    party: str,
    request: KycTagRequest,
    caller: str = Depends(get_caller),
    registry: KycRegistry = Depends(get_kyc_registry),
):
    try:
        registry.set_tag(caller, party, request.tag)
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e))
    return KycTagResponse(party=party, tag=request.tag)
