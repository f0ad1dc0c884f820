from sqlalchemy import Column, String, Integer, BigInteger, Boolean, ForeignKey
from flowledger.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    sender = Column(String, nullable=False, index=True)
    receiver = Column(String, nullable=False, index=True)
    amount = Column(BigInteger, nullable=False, default=0)
    created_at = Column(BigInteger, nullable=False, default=0)  # epoch seconds, 0 = absent
    flagged = Column(Boolean, nullable=False, default=False)
    flag_reason = Column(String, nullable=False, default="")

    @property
    def exists(self) -> bool:
        return bool(self.created_at)

    def __repr__(self):
        return (
            f"<Transaction(id={self.id}, sender={self.sender}, receiver={self.receiver}, "
            f"amount={self.amount}, flagged={self.flagged})>"
        )


def empty_transaction() -> Transaction:
    """Zero-valued record returned for ids that were never recorded. Never persisted."""
    return Transaction(
        id="",
        sender="",
        receiver="",
        amount=0,
        created_at=0,
        flagged=False,
        flag_reason="",
    )


class PartyTransaction(Base):
    __tablename__ = "party_transactions"

    # seq gives the append order of a party's index
    seq = Column(Integer, primary_key=True, autoincrement=True)
    party = Column(String, nullable=False, index=True)
    transaction_id = Column(String, ForeignKey("transactions.id"), nullable=False)


class KycTag(Base):
    __tablename__ = "kyc_tags"

    party = Column(String, primary_key=True)
    tag = Column(String, nullable=False, default="")
    updated_at = Column(BigInteger, nullable=False, default=0)
