"""
conftest.py - Shared pytest fixtures for token ledger tests

Provides common fixtures used across unit, conformance and functional tests:
- Well-known accounts (owner, user1, user2)
- Fresh ledgers (100-token supply at 18 decimals held by owner)
- Ledgers with a standing allowance
"""

import pytest

from token_ledger import parse_units

from tests.accounts import OWNER, USER1, USER2, new_token


# =============================================================================
# ACCOUNT FIXTURES
# =============================================================================

@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def user1():
    return USER1


@pytest.fixture
def user2():
    return USER2


# =============================================================================
# LEDGER FIXTURES
# =============================================================================

@pytest.fixture
def token():
    """Fresh ledger with the whole supply held by the owner."""
    return new_token()


@pytest.fixture
def approved_token():
    """Ledger where the owner has approved user1 for 50 tokens."""
    ledger = new_token()
    ledger.approve(OWNER, USER1, parse_units("50", 18))
    return ledger
