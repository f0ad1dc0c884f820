"""
Write authorization for the ledger.

An authorizer is any callable taking the caller identity and returning True
when that caller may record transactions, flag them, or set KYC tags.
"""
from typing import Callable, Iterable

Authorizer = Callable[[str], bool]


class AllowListAuthorizer:
    """Allows a fixed set of writer identities."""

    def __init__(self, writers: Iterable[str]):
        self._writers = frozenset(writers)

    def __call__(self, caller: str) -> bool:
        return bool(caller) and caller in self._writers


def owner_only(owner: str) -> AllowListAuthorizer:
    return AllowListAuthorizer([owner])
