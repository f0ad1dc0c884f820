from pydantic import BaseModel, Field, field_validator
from typing import List


class RecordRequest(BaseModel):
    transaction_id: str = Field(..., description="Caller-assigned unique id, never reused")
    sender: str
    receiver: str
    amount: int = Field(..., ge=0)

    @field_validator("transaction_id", "sender", "receiver")
    @classmethod
    def addressable(cls, v):
        # Stored as given; must fit in a single URL path segment
        if not v or not v.strip():
            raise ValueError("must not be empty")
        if "/" in v:
            raise ValueError("must not contain '/'")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "transaction_id": "tx_0001",
                "sender": "acct_alice",
                "receiver": "acct_bob",
                "amount": 2500,
            }
        }


class FlagRequest(BaseModel):
    reason: str = ""


class KycTagRequest(BaseModel):
    tag: str


class BulkRecordRequest(BaseModel):
    transactions: List[RecordRequest]

    @field_validator("transactions")
    @classmethod
    def validate_batch(cls, v):
        if not v:
            raise ValueError("transactions cannot be empty")
        if len(v) > 500:
            raise ValueError("Maximum 500 transactions per request")
        return v
