"""
Flow tracer.

Walks the "party sent a transaction to receiver" graph depth-first from a
root party and returns the ids of the transactions reached, in visit order.

Rules:
- At most MAX_TRACE_RESULTS ids are collected; once full, the walk stops
  and the result is returned as-is (no error).
- An id already collected is skipped and not expanded again.
- A transaction whose receiver is the party being expanded is collected but
  not expanded (immediate self-loop). Longer cycles made of distinct ids are
  only bounded by the cap.
- Each collected transaction's subtree is expanded before its next sibling.

The walk uses an explicit stack of per-party iterators, so its depth is
bounded by the cap rather than the interpreter's recursion limit.
"""
import logging
from typing import Iterator, List, Tuple

from flowledger.services.ledger import LEDGER_LOCK, Ledger

logger = logging.getLogger(__name__)

MAX_TRACE_RESULTS = 100


def trace_flow(ledger: Ledger, root: str, limit: int = MAX_TRACE_RESULTS) -> List[str]:
    result: List[str] = []
    visited = set()

    with LEDGER_LOCK:
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(ledger.sent_by(root)))]

        while stack and len(result) < limit:
            party, pending = stack[-1]
            transaction_id = next(pending, None)
            if transaction_id is None:
                stack.pop()
                continue

            if transaction_id in visited:
                continue

            visited.add(transaction_id)
            result.append(transaction_id)

            receiver = ledger.get(transaction_id).receiver
            if receiver != party:
                stack.append((receiver, iter(ledger.sent_by(receiver))))

    if len(result) >= limit:
        logger.info(f"Trace from {root} reached the {limit}-transaction limit")

    return result
