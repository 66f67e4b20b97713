"""
accounts.py - Well-known test accounts and ledger helpers

Shared by conftest fixtures and by property-based tests, which cannot use
function-scoped fixtures inside @given.
"""

from typing import Any, Dict

from token_ledger import Ledger


OWNER = "0x" + "11" * 20
USER1 = "0x" + "22" * 20
USER2 = "0x" + "33" * 20
USER3 = "0x" + "44" * 20

ACCOUNTS = (OWNER, USER1, USER2, USER3)


def new_token(verbose: bool = False) -> Ledger:
    """Create the standard test token: TestToken/TT, 18 decimals, 100 units to OWNER."""
    return Ledger("TestToken", "TT", 18, creator=OWNER, verbose=verbose)


def snapshot(ledger: Ledger) -> Dict[str, Any]:
    """Capture everything a rejected operation must leave untouched."""
    return {
        "balances": dict(ledger.balances),
        "allowances": dict(ledger.allowances),
        "receipts": len(ledger.receipts),
        "events": len(ledger.events),
    }


def ledger_state_equals(ledger1: Ledger, ledger2: Ledger) -> bool:
    """Check that two ledgers hold the same balances and allowances."""
    diff = compare_ledger_states(ledger1, ledger2)
    return diff["equal"]


def compare_ledger_states(ledger1: Ledger, ledger2: Ledger) -> dict:
    """Compare two ledger states and return differences."""
    balance_diffs = []
    allowance_diffs = []

    for account in set(ledger1.balances) | set(ledger2.balances):
        bal1 = ledger1.balances.get(account, 0)
        bal2 = ledger2.balances.get(account, 0)
        if bal1 != bal2:
            balance_diffs.append((account, bal1, bal2))

    for key in set(ledger1.allowances) | set(ledger2.allowances):
        a1 = ledger1.allowances.get(key, 0)
        a2 = ledger2.allowances.get(key, 0)
        if a1 != a2:
            allowance_diffs.append((key, a1, a2))

    return {
        "equal": not balance_diffs and not allowance_diffs,
        "balance_diffs": balance_diffs,
        "allowance_diffs": allowance_diffs,
    }


def assert_conserved(ledger: Ledger) -> None:
    result = ledger.verify_conservation()
    assert result["valid"], f"Conservation violated: {result}"
