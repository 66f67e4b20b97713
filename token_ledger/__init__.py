"""
token_ledger - Fixed-Supply Fungible-Token Ledger

Balances, allowances and delegated transfers for a single divisible asset,
with every operation attributed to an explicit caller.

Usage:
    from token_ledger import Ledger, parse_units

    owner = "0x" + "11" * 20
    alice = "0x" + "22" * 20
    bob = "0x" + "33" * 20

    ledger = Ledger("TestToken", "TT", 18, creator=owner)

    # Direct transfer
    ledger.transfer(owner, alice, parse_units("10"))

    # Delegated transfer
    ledger.approve(owner, bob, parse_units("5"))
    receipt = ledger.transfer_from(bob, owner, alice, parse_units("2"))
    receipt.events  # (Transfer(owner→alice: 2000000000000000000),)
"""

# Core types
from .core import (
    LedgerView,
    Transfer,
    Approval,
    Event,
    Receipt,
    Address,
    Amount,
    Balances,
    Allowances,
    LedgerError,
    InvalidRecipient,
    InvalidSpender,
    InsufficientBalance,
    InsufficientAllowance,
    InvalidAddress,
    InvalidAmount,
    to_address,
    require_caller,
    require_amount,
    parse_units,
    format_units,
    check_transfer,
    check_approve,
    check_transfer_from,
    ZERO_ADDRESS,
    MAX_UINT256,
    MAX_DECIMALS,
    DEFAULT_DECIMALS,
    DEFAULT_INITIAL_UNITS,
    OP_CREATE,
    OP_TRANSFER,
    OP_APPROVE,
    OP_TRANSFER_FROM,
)

# Ledger
from .ledger import Ledger

# Deployment
from .deployment import (
    TokenConfig,
    PRAGMA_TOKEN,
    FIXED_TOKEN,
    PRESETS,
    deploy,
    deploy_preset,
)

__all__ = [
    # Core
    'LedgerView', 'Transfer', 'Approval', 'Event', 'Receipt',
    'Address', 'Amount', 'Balances', 'Allowances',
    'LedgerError', 'InvalidRecipient', 'InvalidSpender',
    'InsufficientBalance', 'InsufficientAllowance', 'InvalidAddress', 'InvalidAmount',
    'to_address', 'require_caller', 'require_amount', 'parse_units', 'format_units',
    'check_transfer', 'check_approve', 'check_transfer_from',
    'ZERO_ADDRESS', 'MAX_UINT256', 'MAX_DECIMALS', 'DEFAULT_DECIMALS', 'DEFAULT_INITIAL_UNITS',
    'OP_CREATE', 'OP_TRANSFER', 'OP_APPROVE', 'OP_TRANSFER_FROM',
    # Ledger
    'Ledger',
    # Deployment
    'TokenConfig', 'PRAGMA_TOKEN', 'FIXED_TOKEN', 'PRESETS', 'deploy', 'deploy_preset',
]

__version__ = '1.0.0'
