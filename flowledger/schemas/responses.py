from pydantic import BaseModel
from typing import List


class TransactionResponse(BaseModel):
    id: str
    sender: str
    receiver: str
    amount: int
    created_at: int
    flagged: bool
    flag_reason: str
    exists: bool

    class Config:
        from_attributes = True


class FlaggedTransactions(BaseModel):
    count: int
    transactions: List[TransactionResponse]


class PartyTransactions(BaseModel):
    party: str
    transaction_ids: List[str]


class TraceResponse(BaseModel):
    root: str
    count: int
    limit: int
    limit_reached: bool
    transaction_ids: List[str]


class KycTagResponse(BaseModel):
    party: str
    tag: str


class FailedRecord(BaseModel):
    transaction_id: str
    error: str


class BulkRecordSummary(BaseModel):
    total_submitted: int
    recorded: int
    failed: int
    recorded_transaction_ids: List[str]
    failed_transactions: List[FailedRecord] = []
    processing_time_ms: int
