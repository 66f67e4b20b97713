#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Token Ledger Step by Step

A pedagogical walkthrough of how the token ledger works. Each step builds on
the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3: Foundation    - Deployment, supply, direct transfers
  4-5: Rejections    - Typed errors, atomicity
  6-7: Delegation    - Approvals, transfer_from, the overwrite law
  8:   Audit         - Receipts, events, replay and the conservation proof

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys

from token_ledger import (
    Ledger, TokenConfig, deploy,
    LedgerError, ZERO_ADDRESS, MAX_UINT256,
    parse_units, format_units,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    token: TokenConfig = TokenConfig(name="PRAGMA", symbol="PMA", decimals=18)

    owner: str = "0x" + "11" * 20
    alice: str = "0x" + "a1" * 20
    bob: str = "0x" + "b0" * 20

    alice_funding: str = "10"
    bob_allowance: str = "5"
    bob_spend: str = "2"


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


def show_balances(ledger: Ledger):
    for label, account in (("owner", CONFIG.owner), ("alice", CONFIG.alice), ("bob", CONFIG.bob)):
        amount = format_units(ledger.balance_of(account), ledger.decimals)
        print(f"  {label:<6} {amount:>8} {ledger.symbol}")


# ============================================================================
# FOUNDATION (Steps 1-3)
# ============================================================================

def step_01_deploy() -> Ledger:
    step_header(1, "Deploying a Token",
        "Creation issues the whole fixed supply to the deployer, once.")

    print(f">>> ledger = deploy({CONFIG.token!r}, owner, verbose=True)")
    ledger = deploy(CONFIG.token, CONFIG.owner, verbose=True)

    section_header("Initial State")
    print(f"Total supply: {ledger.total_supply()} base units "
          f"({format_units(ledger.total_supply(), ledger.decimals)} {ledger.symbol})")
    show_balances(ledger)

    section_header("Key Insight")
    print("""
    Issuance is logged as a Transfer FROM the null account. Every token in
    existence can be traced back to that one event.
    """)
    wait_for_enter()
    return ledger


def step_02_units(ledger: Ledger):
    step_header(2, "Base Units",
        "Amounts are integers; decimals only scale them for display.")

    for text in ("1", "0.5", CONFIG.alice_funding):
        print(f"parse_units({text!r}, {ledger.decimals}) = {parse_units(text, ledger.decimals)}")
    wait_for_enter()


def step_03_transfer(ledger: Ledger):
    step_header(3, "Direct Transfer",
        "transfer(caller, to, amount) debits the caller and credits the recipient.")

    receipt = ledger.transfer(CONFIG.owner, CONFIG.alice, parse_units(CONFIG.alice_funding))
    print(f"\nReceipt: {receipt!r}")
    show_balances(ledger)
    wait_for_enter()


# ============================================================================
# REJECTIONS (Steps 4-5)
# ============================================================================

def step_04_rejections(ledger: Ledger):
    step_header(4, "Rejected Operations",
        "Every precondition violation raises a typed error with a reason.")

    attempts = [
        ("transfer to the null account",
         lambda: ledger.transfer(CONFIG.owner, ZERO_ADDRESS, 1)),
        ("bob spends tokens he does not have",
         lambda: ledger.transfer(CONFIG.bob, CONFIG.alice, 1)),
        ("approve the null account",
         lambda: ledger.approve(CONFIG.owner, ZERO_ADDRESS, 1)),
        ("bob moves alice's tokens without approval",
         lambda: ledger.transfer_from(CONFIG.bob, CONFIG.alice, CONFIG.bob, 1)),
    ]
    for label, attempt in attempts:
        try:
            attempt()
        except LedgerError as e:
            print(f"  {label:<45} -> {type(e).__name__}")
    wait_for_enter()


def step_05_atomicity(ledger: Ledger):
    step_header(5, "Atomicity",
        "A rejected operation leaves balances, allowances and the log untouched.")

    before = (dict(ledger.balances), dict(ledger.allowances), len(ledger.receipts))
    try:
        ledger.transfer(CONFIG.alice, CONFIG.bob, ledger.balance_of(CONFIG.alice) + 1)
    except LedgerError:
        pass
    after = (dict(ledger.balances), dict(ledger.allowances), len(ledger.receipts))
    print(f"State unchanged after rejection: {before == after}")
    wait_for_enter()


# ============================================================================
# DELEGATION (Steps 6-7)
# ============================================================================

def step_06_delegation(ledger: Ledger):
    step_header(6, "Delegated Transfers",
        "approve() grants an allowance; transfer_from() spends it.")

    ledger.approve(CONFIG.alice, CONFIG.bob, parse_units(CONFIG.bob_allowance))
    ledger.transfer_from(CONFIG.bob, CONFIG.alice, CONFIG.bob, parse_units(CONFIG.bob_spend))

    remaining = ledger.allowance(CONFIG.alice, CONFIG.bob)
    print(f"\nRemaining allowance: {format_units(remaining, ledger.decimals)} {ledger.symbol}")
    show_balances(ledger)
    wait_for_enter()


def step_07_overwrite(ledger: Ledger):
    step_header(7, "Approvals Overwrite",
        "A second approve sets the allowance; it never adds to it.")

    ledger.approve(CONFIG.alice, CONFIG.bob, 100)
    ledger.approve(CONFIG.alice, CONFIG.bob, 40)
    print(f"allowance after approve(100), approve(40): {ledger.allowance(CONFIG.alice, CONFIG.bob)}")

    ledger.approve(CONFIG.alice, CONFIG.bob, MAX_UINT256)
    ledger.transfer_from(CONFIG.bob, CONFIG.alice, CONFIG.bob, 1)
    print(f"MAX_UINT256 allowance after spending 1: MAX_UINT256 - "
          f"{MAX_UINT256 - ledger.allowance(CONFIG.alice, CONFIG.bob)}")
    wait_for_enter()


# ============================================================================
# AUDIT (Step 8)
# ============================================================================

def step_08_audit(ledger: Ledger):
    step_header(8, "Receipts, Replay and Conservation",
        "The receipt log is the source of truth and reproduces the state exactly.")

    for receipt in ledger.receipts:
        print(f"  {receipt!r}")

    replayed = ledger.replay()
    print(f"\nReplayed balances match:   {replayed.balances == ledger.balances}")
    print(f"Replayed allowances match: {replayed.allowances == ledger.allowances}")

    result = ledger.verify_conservation()
    print(f"Sum of balances == supply: {result['valid']} "
          f"({result['sum_of_balances']} == {result['total_supply']})")


def main():
    ledger = step_01_deploy()
    # Keep later steps quiet so the walkthrough output stays readable.
    ledger.verbose = False
    step_02_units(ledger)
    step_03_transfer(ledger)
    step_04_rejections(ledger)
    step_05_atomicity(ledger)
    step_06_delegation(ledger)
    step_07_overwrite(ledger)
    step_08_audit(ledger)

    print("""
    SUMMARY
      - Supply is fixed at creation and always equals the sum of balances
      - Every operation names its caller explicitly
      - Failures are typed and leave no trace in state
      - Allowances are set, not added, and decremented on every spend
    """)


if __name__ == "__main__":
    main()
