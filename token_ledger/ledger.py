"""
ledger.py - Stateful Fungible-Token Ledger

The Ledger class is the central state manager for the token ledger.
It is the only module that mutates state, ensuring controlled and auditable changes.

Key responsibilities:
    - Implements LedgerView protocol for safe read-only access by pure functions
    - Executes transfer, approve and transfer_from atomically (validate, then commit)
    - Maintains balances, allowances and the fixed total supply
    - Records every committed operation as a Receipt (clone, replay)
    - Always validates and always logs - no exceptions
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .core import (
    # Types
    Address, Amount, Balances, Allowances,
    Transfer, Approval, Event, Receipt,
    # Constants
    ZERO_ADDRESS, DEFAULT_DECIMALS, DEFAULT_INITIAL_UNITS,
    OP_CREATE, OP_TRANSFER, OP_APPROVE, OP_TRANSFER_FROM,
    # Exceptions
    LedgerError,
    # Validation
    to_address, require_caller, require_amount, require_decimals, format_units,
    check_transfer, check_approve, check_transfer_from,
)


class Ledger:
    """
    Fixed-supply fungible-token ledger with full validation and audit trail.

    Implements the LedgerView protocol, allowing the ledger to be passed to pure
    precondition checks that access only read-only methods.

    Design Principles:
        - Always validates: every operation checks all of its preconditions
          before the first write, so a rejected call leaves state untouched.
        - Always logs: every committed operation is recorded as a Receipt,
          enabling replay() for state reconstruction.
        - Caller is explicit: no operation runs with an implicit identity.

    Thread Safety:
        Not thread-safe. The host must serialize operations on one instance.

    Example:
        ledger = Ledger("TestToken", "TT", 18, creator=owner)
        ledger.transfer(owner, user1, 1000)
        ledger.approve(owner, user1, parse_units("50"))
        ledger.transfer_from(user1, owner, user2, parse_units("20"))
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = DEFAULT_DECIMALS,
        initial_units: int = DEFAULT_INITIAL_UNITS,
        *,
        creator: Address,
        verbose: bool = True,
    ):
        """
        Create a ledger and issue the whole supply to the creator.

        Args:
            name: Display name of the token
            symbol: Display symbol of the token
            decimals: Scaling exponent for display (default: 18)
            initial_units: Whole tokens issued, before scaling (default: 100)
            creator: Account credited with the total supply
            verbose: Enable debug output (default: True)

        Raises:
            ValueError: If name, symbol or decimals are invalid
            InvalidAddress: If creator is malformed or the null account
            InvalidAmount: If the scaled supply exceeds MAX_UINT256
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Token name cannot be empty")
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError("Token symbol cannot be empty")
        require_decimals(decimals)
        require_amount(initial_units)
        creator = require_caller(creator)

        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self._total_supply = require_amount(initial_units * 10 ** decimals)
        self.creator = creator
        self.verbose = verbose

        self.balances: Balances = {}
        self.allowances: Allowances = {}
        self.receipts: List[Receipt] = []
        self.events: List[Event] = []

        # Issuance is recorded as a transfer from the null account so supply
        # provenance is observable in the event log.
        self._commit(
            OP_CREATE, creator, (self._total_supply,),
            credits=[(creator, self._total_supply)],
            events=(Transfer(ZERO_ADDRESS, creator, self._total_supply),),
        )

    # ========================================================================
    # METADATA
    # ========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def decimals(self) -> int:
        return self._decimals

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def total_supply(self) -> Amount:
        """Return the immutable total supply in base units."""
        return self._total_supply

    def balance_of(self, account: Address) -> Amount:
        """
        Get the balance of an account.

        Returns:
            Current balance (0 if the account has never held tokens)

        Raises:
            InvalidAddress: If account is malformed
        """
        return self.balances.get(to_address(account), 0)

    def allowance(self, owner: Address, spender: Address) -> Amount:
        """
        Get how much spender may move out of owner's balance.

        Returns:
            Current allowance (0 if never approved)

        Raises:
            InvalidAddress: If owner or spender is malformed
        """
        return self.allowances.get((to_address(owner), to_address(spender)), 0)

    # ERC-20 interface names
    totalSupply = total_supply
    balanceOf = balance_of

    def holders(self) -> Balances:
        """Return every non-zero balance, ordered by address."""
        return {a: b for a, b in sorted(self.balances.items()) if b}

    def events_named(self, name: str) -> List[Event]:
        """Return emitted events whose name matches ("Transfer" or "Approval")."""
        return [e for e in self.events if e.name == name]

    def verify_conservation(self) -> Dict[str, Any]:
        """
        Verify that the supply conservation law holds.

        The sum of all balances must equal the total supply, and no balance
        or allowance may be negative.

        Returns:
            Dict with keys:
            - 'valid': bool - True if all invariants hold
            - 'total_supply': Amount
            - 'sum_of_balances': Amount - summed in address order
            - 'difference': int - sum_of_balances - total_supply
            - 'negative_balances': List[Address]
            - 'negative_allowances': List[Tuple[Address, Address]]

        Example:
            result = ledger.verify_conservation()
            assert result['valid'], f"Conservation violated: {result}"
        """
        balance_sum = sum(self.balances[a] for a in sorted(self.balances))
        negative_balances = sorted(a for a, b in self.balances.items() if b < 0)
        negative_allowances = sorted(k for k, v in self.allowances.items() if v < 0)
        difference = balance_sum - self._total_supply
        return {
            'valid': difference == 0 and not negative_balances and not negative_allowances,
            'total_supply': self._total_supply,
            'sum_of_balances': balance_sum,
            'difference': difference,
            'negative_balances': negative_balances,
            'negative_allowances': negative_allowances,
        }

    # ========================================================================
    # OPERATIONS (Mutating)
    # ========================================================================

    def transfer(self, caller: Address, to: Address, amount: Amount) -> Receipt:
        """
        Move amount from caller's balance to to.

        Self-transfers succeed, leave the balance unchanged and still emit.

        Args:
            caller: Account invoking the transfer (debited)
            to: Recipient account (credited)
            amount: Base units to move

        Returns:
            Receipt carrying Transfer(caller, to, amount)

        Raises:
            InvalidRecipient: If to is the null account
            InsufficientBalance: If amount exceeds caller's balance
        """
        caller, to = require_caller(caller), to_address(to)
        require_amount(amount)
        self._check(OP_TRANSFER, check_transfer, caller, to, amount)
        return self._commit(
            OP_TRANSFER, caller, (to, amount),
            debits=[(caller, amount)],
            credits=[(to, amount)],
            events=(Transfer(caller, to, amount),),
        )

    def approve(self, caller: Address, spender: Address, amount: Amount) -> Receipt:
        """
        Set spender's allowance over caller's balance to exactly amount.

        The allowance is overwritten, never accumulated. MAX_UINT256 is stored
        as-is and is decremented on spend like any other value.

        Returns:
            Receipt carrying Approval(caller, spender, amount)

        Raises:
            InvalidSpender: If spender is the null account
        """
        caller, spender = require_caller(caller), to_address(spender)
        require_amount(amount)
        self._check(OP_APPROVE, check_approve, caller, spender, amount)
        return self._commit(
            OP_APPROVE, caller, (spender, amount),
            allowance_updates=[((caller, spender), amount)],
            events=(Approval(caller, spender, amount),),
        )

    def transfer_from(
        self,
        caller: Address,
        sender: Address,
        to: Address,
        amount: Amount,
    ) -> Receipt:
        """
        Move amount from sender to to, spending caller's allowance.

        The allowance decrement does not emit an Approval event.

        Args:
            caller: Spender invoking the transfer
            sender: Owner whose balance is debited
            to: Recipient account (credited)
            amount: Base units to move

        Returns:
            Receipt carrying Transfer(sender, to, amount)

        Raises:
            InvalidRecipient: If to is the null account
            InsufficientAllowance: If amount exceeds allowance(sender, caller)
            InsufficientBalance: If amount exceeds sender's balance
        """
        caller, sender, to = require_caller(caller), to_address(sender), to_address(to)
        require_amount(amount)
        self._check(OP_TRANSFER_FROM, check_transfer_from, caller, sender, to, amount)
        key = (sender, caller)
        return self._commit(
            OP_TRANSFER_FROM, caller, (sender, to, amount),
            debits=[(sender, amount)],
            credits=[(to, amount)],
            allowance_updates=[(key, self.allowances.get(key, 0) - amount)],
            events=(Transfer(sender, to, amount),),
        )

    transferFrom = transfer_from

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _check(self, operation: str, check: Callable[..., None], *args) -> None:
        """Run a precondition check, reporting rejections when verbose."""
        try:
            check(self, *args)
        except LedgerError as e:
            if self.verbose:
                print(f"✗ REJECTED {operation}: {e}")
            raise

    def _commit(
        self,
        operation: str,
        caller: Address,
        arguments: Tuple,
        debits: Sequence[Tuple[Address, Amount]] = (),
        credits: Sequence[Tuple[Address, Amount]] = (),
        allowance_updates: Sequence[Tuple[Tuple[Address, Address], Amount]] = (),
        events: Sequence[Event] = (),
    ) -> Receipt:
        """
        Apply already-validated effects and log the receipt.

        Debits are applied before credits so self-transfers net to zero.
        Nothing in here can fail once preconditions have passed.
        """
        for account, amount in debits:
            self.balances[account] = self.balances.get(account, 0) - amount
        for account, amount in credits:
            self.balances[account] = self.balances.get(account, 0) + amount
        for key, value in allowance_updates:
            self.allowances[key] = value

        receipt = Receipt(
            sequence_number=len(self.receipts),
            operation=operation,
            caller=caller,
            arguments=arguments,
            events=tuple(events),
        )
        self.receipts.append(receipt)
        self.events.extend(receipt.events)

        if self.verbose:
            self._print_receipt(receipt)
        return receipt

    def _print_receipt(self, receipt: Receipt) -> None:
        for event in receipt.events:
            amount = format_units(event.amount, self._decimals)
            print(f"✓ APPLIED #{receipt.sequence_number} {event.name}: "
                  f"{event.args[0]} → {event.args[1]} {amount} {self._symbol}")

    # ========================================================================
    # LEDGER OPERATIONS
    # ========================================================================

    def clone(self) -> Ledger:
        """
        Create an independent copy of this ledger.

        Receipts and events are immutable and shared; the balance and
        allowance mappings are copied.
        """
        cloned = Ledger.__new__(Ledger)
        cloned._name = self._name
        cloned._symbol = self._symbol
        cloned._decimals = self._decimals
        cloned._total_supply = self._total_supply
        cloned.creator = self.creator
        cloned.verbose = self.verbose
        cloned.balances = dict(self.balances)
        cloned.allowances = dict(self.allowances)
        cloned.receipts = list(self.receipts)
        cloned.events = list(self.events)
        return cloned

    def replay(self) -> Ledger:
        """
        Create a new ledger by re-executing the receipt log.

        The replayed ledger has identical balances, allowances, receipts and
        events. Re-execution is silent; the result inherits this ledger's
        verbose setting afterwards.

        Raises:
            LedgerError: If any logged operation is rejected during replay
        """
        new_ledger = Ledger(
            self._name, self._symbol, self._decimals,
            initial_units=self._total_supply // 10 ** self._decimals,
            creator=self.creator,
            verbose=False,
        )
        operations = {
            OP_TRANSFER: new_ledger.transfer,
            OP_APPROVE: new_ledger.approve,
            OP_TRANSFER_FROM: new_ledger.transfer_from,
        }
        for receipt in self.receipts[1:]:
            try:
                replayed = operations[receipt.operation](receipt.caller, *receipt.arguments)
            except LedgerError as e:
                raise LedgerError(f"Replay failed at receipt #{receipt.sequence_number}: {e}") from e
            if replayed.events != receipt.events:
                raise LedgerError(f"Replay diverged at receipt #{receipt.sequence_number}")
        new_ledger.verbose = self.verbose
        return new_ledger

    def __repr__(self) -> str:
        return (f"Ledger({self._name!r}, {self._symbol!r}, decimals={self._decimals}, "
                f"supply={self._total_supply}, holders={len(self.holders())})")
