"""
Core types and pure functions for the token ledger.

This module provides the foundational data structures and protocols for the ledger:
1. Protocols: LedgerView for read-only ledger access
2. Immutable data structures: Transfer, Approval, Receipt
3. Exceptions: LedgerError and domain-specific error types
4. Type aliases: Address, Amount, Balances, Allowances
5. Validation: address and amount normalization, unit scaling
6. Preconditions: pure checks for transfer, approve and transfer_from

All functions in this module are pure and operate on read-only views.
No function can mutate ledger state directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import re
from typing import (
    Dict, Tuple, Union, Protocol, runtime_checkable
)


# ============================================================================
# CONSTANTS
# ============================================================================

# Largest value an amount may take (uint256).
MAX_UINT256 = 2 ** 256 - 1

# The null account. Never a valid recipient or spender.
ZERO_ADDRESS = "0x" + "0" * 40

# Decimals are stored as uint8.
MAX_DECIMALS = 255

DEFAULT_DECIMALS = 18

# Whole tokens issued at creation, before scaling by 10**decimals.
DEFAULT_INITIAL_UNITS = 100

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Revert reasons.
ERR_TRANSFER_TO_ZERO = "ERC20: transfer to the zero address"
ERR_APPROVE_TO_ZERO = "ERC20: approve to the zero address"
ERR_TRANSFER_EXCEEDS_BALANCE = "ERC20: transfer amount exceeds balance"
ERR_INSUFFICIENT_ALLOWANCE = "ERC20: insufficient allowance"


# ============================================================================
# TYPE ALIASES
# ============================================================================

# Canonical lower-case, 0x-prefixed, 40-hex-digit account identifier.
Address = str

# Unsigned integer in base units, 0 <= amount <= MAX_UINT256.
Amount = int

# Mapping from account to balance. Absent accounts hold zero.
Balances = Dict[Address, Amount]

# Mapping from (owner, spender) to allowance. Absent pairs are zero.
Allowances = Dict[Tuple[Address, Address], Amount]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class InvalidRecipient(LedgerError):
    """Raised when a transfer targets the null account."""
    pass


class InvalidSpender(LedgerError):
    """Raised when an approval names the null account as spender."""
    pass


class InsufficientBalance(LedgerError):
    """Raised when an amount exceeds the source account's balance."""
    pass


class InsufficientAllowance(LedgerError):
    """Raised when an amount exceeds the caller's allowance from the source account."""
    pass


class InvalidAddress(LedgerError, ValueError):
    """Raised when an account identifier is not a well-formed address."""
    pass


class InvalidAmount(LedgerError, ValueError):
    """Raised when an amount is not an integer in [0, MAX_UINT256]."""
    pass


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Precondition checks accept a LedgerView to declare their read-only intent.
    The Ledger class implements this protocol but also provides mutation
    methods. For testing, FakeView provides a truly immutable implementation.
    """

    def total_supply(self) -> Amount:
        """Return the fixed total supply."""
        ...

    def balance_of(self, account: Address) -> Amount:
        """Return the balance of an account, zero if it has never held tokens."""
        ...

    def allowance(self, owner: Address, spender: Address) -> Amount:
        """Return how much spender may move out of owner's balance."""
        ...


# ============================================================================
# EVENTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class Transfer:
    """
    Notification of a balance movement.

    Attributes:
        sender: Account debited (ZERO_ADDRESS for the creation issuance).
        recipient: Account credited.
        amount: Base units moved.
    """
    sender: Address
    recipient: Address
    amount: Amount

    @property
    def name(self) -> str:
        return "Transfer"

    @property
    def args(self) -> Tuple[Address, Address, Amount]:
        return (self.sender, self.recipient, self.amount)

    def __repr__(self) -> str:
        return f"Transfer({self.sender}→{self.recipient}: {self.amount})"


@dataclass(frozen=True, slots=True)
class Approval:
    """
    Notification that owner set spender's allowance to amount.

    Emitted on every successful approve, including zero or unchanged amounts.
    """
    owner: Address
    spender: Address
    amount: Amount

    @property
    def name(self) -> str:
        return "Approval"

    @property
    def args(self) -> Tuple[Address, Address, Amount]:
        return (self.owner, self.spender, self.amount)

    def __repr__(self) -> str:
        return f"Approval({self.owner}→{self.spender}: {self.amount})"


Event = Union[Transfer, Approval]


OP_CREATE = "create"
OP_TRANSFER = "transfer"
OP_APPROVE = "approve"
OP_TRANSFER_FROM = "transfer_from"


@dataclass(frozen=True, slots=True)
class Receipt:
    """
    An executed, immutable record of one committed ledger operation.

    Attributes:
        sequence_number: Monotonic position in the ledger's log (creation is 0).
        operation: One of OP_CREATE, OP_TRANSFER, OP_APPROVE, OP_TRANSFER_FROM.
        caller: Account that invoked the operation.
        arguments: Operation arguments after the caller, in call order.
        events: Notifications emitted by the operation.
    """
    sequence_number: int
    operation: str
    caller: Address
    arguments: Tuple
    events: Tuple[Event, ...]

    def __post_init__(self):
        if self.operation not in (OP_CREATE, OP_TRANSFER, OP_APPROVE, OP_TRANSFER_FROM):
            raise ValueError(f"Unknown operation: {self.operation}")
        if self.sequence_number < 0:
            raise ValueError("Receipt sequence_number must be non-negative")

    def __repr__(self) -> str:
        events = ", ".join(repr(e) for e in self.events)
        return f"Receipt(#{self.sequence_number} {self.operation} by {self.caller}: [{events}])"


# ============================================================================
# VALIDATION
# ============================================================================

def to_address(value: str) -> Address:
    """
    Normalize an account identifier to its canonical lower-case form.

    Raises:
        InvalidAddress: If value is not a 0x-prefixed 40-hex-digit string.
    """
    if not isinstance(value, str) or not _ADDRESS_PATTERN.match(value):
        raise InvalidAddress(f"Malformed address: {value!r}")
    return value.lower()


def require_caller(value: str) -> Address:
    """
    Normalize the account invoking an operation.

    The null account stands for "no account" and can never act.

    Raises:
        InvalidAddress: If value is malformed or is ZERO_ADDRESS.
    """
    caller = to_address(value)
    if caller == ZERO_ADDRESS:
        raise InvalidAddress("Caller cannot be the zero address")
    return caller


def require_amount(value: int) -> Amount:
    """
    Validate that value is an unsigned 256-bit integer.

    Raises:
        InvalidAmount: For bools, non-integers, negatives and values above MAX_UINT256.
    """
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"Amount must be int, got {type(value).__name__}")
    if value < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {value}")
    if value > MAX_UINT256:
        raise InvalidAmount("Amount exceeds MAX_UINT256")
    return value


def require_decimals(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"decimals must be int, got {type(value).__name__}")
    if not 0 <= value <= MAX_DECIMALS:
        raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}], got {value}")
    return value


def parse_units(value: Union[str, int, Decimal], decimals: int = DEFAULT_DECIMALS) -> Amount:
    """
    Convert a human-readable token quantity to base units.

    parse_units("1.5", 18) == 1_500_000_000_000_000_000

    Raises:
        InvalidAmount: If value is negative, not a number, has more fractional
                       digits than decimals, or scales beyond MAX_UINT256.
    """
    require_decimals(decimals)
    if isinstance(value, bool) or isinstance(value, float):
        # Floats lose precision before scaling; callers pass strings instead.
        raise InvalidAmount(f"Cannot parse units from {type(value).__name__}")
    try:
        quantity = Decimal(value) if isinstance(value, (int, Decimal)) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmount(f"Not a number: {value!r}") from None
    if not quantity.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    if quantity < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {value!r}")

    # Scale on the integer coefficient so no Decimal context rounding applies.
    _, digits, exponent = quantity.as_tuple()
    coefficient = int("".join(str(d) for d in digits))
    exponent += decimals
    if coefficient == 0:
        return 0
    if len(digits) + exponent > len(str(MAX_UINT256)):
        raise InvalidAmount("Amount exceeds MAX_UINT256")
    if exponent >= 0:
        return require_amount(coefficient * 10 ** exponent)
    if -exponent > len(digits):
        # Coefficient is smaller than the divisor, so a remainder is certain.
        raise InvalidAmount(f"{value!r} has more than {decimals} fractional digits")
    divisor = 10 ** -exponent
    if coefficient % divisor:
        raise InvalidAmount(f"{value!r} has more than {decimals} fractional digits")
    return require_amount(coefficient // divisor)


def format_units(amount: Amount, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Render base units as a human-readable decimal string.

    format_units(10**18, 18) == "1.0"; the fractional part keeps at least one digit.
    """
    require_amount(amount)
    require_decimals(decimals)
    if decimals == 0:
        return str(amount)
    whole, frac = divmod(amount, 10 ** decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{whole}.{frac_str}"


# ============================================================================
# PRECONDITIONS
# ============================================================================
#
# Each check raises the matching LedgerError or returns None. They read state
# only through a LedgerView and never mutate it, so the Ledger can run every
# check before its first write.
#

def check_transfer(view: LedgerView, caller: Address, to: Address, amount: Amount) -> None:
    """
    Validate transfer(caller, to, amount).

    Raises:
        InvalidRecipient: If to is the null account.
        InsufficientBalance: If amount exceeds caller's balance.
    """
    if to == ZERO_ADDRESS:
        raise InvalidRecipient(ERR_TRANSFER_TO_ZERO)
    if amount > view.balance_of(caller):
        raise InsufficientBalance(ERR_TRANSFER_EXCEEDS_BALANCE)


def check_approve(view: LedgerView, caller: Address, spender: Address, amount: Amount) -> None:
    """Validate approve(caller, spender, amount). Raises InvalidSpender for the null account."""
    if spender == ZERO_ADDRESS:
        raise InvalidSpender(ERR_APPROVE_TO_ZERO)


def check_transfer_from(
    view: LedgerView,
    caller: Address,
    sender: Address,
    to: Address,
    amount: Amount,
) -> None:
    """
    Validate transfer_from(caller, sender, to, amount).

    Checked in order: recipient, allowance, balance. The allowance error comes
    first since it is the more specific signal for a delegated caller. The
    source account is deliberately not checked against the null account.

    Raises:
        InvalidRecipient: If to is the null account.
        InsufficientAllowance: If amount exceeds allowance(sender, caller).
        InsufficientBalance: If amount exceeds sender's balance.
    """
    if to == ZERO_ADDRESS:
        raise InvalidRecipient(ERR_TRANSFER_TO_ZERO)
    if amount > view.allowance(sender, caller):
        raise InsufficientAllowance(ERR_INSUFFICIENT_ALLOWANCE)
    if amount > view.balance_of(sender):
        raise InsufficientBalance(ERR_TRANSFER_EXCEEDS_BALANCE)
