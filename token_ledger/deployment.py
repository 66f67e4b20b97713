"""
deployment.py - Token configuration and ledger instantiation

A TokenConfig fixes everything a ledger needs at creation except the creating
account. Two presets cover the common deployments:

    PRAGMA_TOKEN  - the parameterised token ("PRAGMA", "PMA", 18 decimals)
    FIXED_TOKEN   - a token whose parameters are hard-coded defaults

Usage:
    from token_ledger import deploy, PRAGMA_TOKEN

    ledger = deploy(PRAGMA_TOKEN, deployer="0x" + "11" * 20)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from .core import (
    Address, Amount,
    DEFAULT_DECIMALS, DEFAULT_INITIAL_UNITS, MAX_UINT256,
    require_decimals,
)
from .ledger import Ledger


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Immutable creation parameters for a token ledger.

    Attributes:
        name: Display name of the token.
        symbol: Display symbol of the token.
        decimals: Scaling exponent, 0-255.
        initial_units: Whole tokens issued to the deployer at creation.

    All fields are validated in __post_init__.
    """
    name: str = "Token"
    symbol: str = "TKN"
    decimals: int = DEFAULT_DECIMALS
    initial_units: int = DEFAULT_INITIAL_UNITS

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("TokenConfig name cannot be empty")
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise ValueError("TokenConfig symbol cannot be empty")
        require_decimals(self.decimals)
        if isinstance(self.initial_units, bool) or not isinstance(self.initial_units, int):
            raise ValueError(f"initial_units must be int, got {type(self.initial_units).__name__}")
        if self.initial_units < 0:
            raise ValueError(f"initial_units must be non-negative, got {self.initial_units}")
        if self.total_supply > MAX_UINT256:
            raise ValueError("initial_units * 10**decimals exceeds MAX_UINT256")

    @property
    def total_supply(self) -> Amount:
        return self.initial_units * 10 ** self.decimals


PRAGMA_TOKEN = TokenConfig(name="PRAGMA", symbol="PMA", decimals=18)

FIXED_TOKEN = TokenConfig()

PRESETS: Dict[str, TokenConfig] = {
    "pragma": PRAGMA_TOKEN,
    "fixed": FIXED_TOKEN,
}


def deploy(config: TokenConfig, deployer: Address, verbose: bool = False) -> Ledger:
    """
    Create a ledger from a config, crediting the whole supply to deployer.

    Args:
        config: Token parameters
        deployer: Account that creates the ledger and receives the supply
        verbose: Forwarded to the Ledger (default: False)

    Returns:
        The newly created Ledger
    """
    ledger = Ledger(
        config.name,
        config.symbol,
        config.decimals,
        initial_units=config.initial_units,
        creator=deployer,
        verbose=verbose,
    )
    if verbose:
        print(f"📝 Deployed: {config.symbol} ({config.name}) to {ledger.creator}")
    return ledger


def deploy_preset(preset: str, deployer: Address, verbose: bool = False) -> Ledger:
    """
    Deploy one of the named PRESETS.

    Raises:
        KeyError: If preset is not a known name
    """
    if preset not in PRESETS:
        raise KeyError(f"Unknown preset {preset!r}; expected one of {sorted(PRESETS)}")
    return deploy(PRESETS[preset], deployer, verbose=verbose)
