class LedgerError(Exception):
    """Base class for rejected ledger writes."""


class Unauthorized(LedgerError):
    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"Caller '{caller}' is not authorized to write to the ledger")


class AlreadyExists(LedgerError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} already exists")


class NotFound(LedgerError):
    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")
