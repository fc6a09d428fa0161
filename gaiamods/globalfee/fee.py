"""Ante check of transaction fees against global and local minimum gas prices."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Sequence

from gaiamods.coins import Coins, DecCoin
from gaiamods.globalfee.fee_utils import (
    combined_fee_requirement,
    denoms_subset_of_including_zero,
    get_min_gas_price,
    is_any_gte_including_zero,
    required_fees,
)
from gaiamods.globalfee.params import PARAM_STORE_KEY_MIN_GAS_PRICES

MAX_BYPASS_MIN_FEE_MSG_GAS_USAGE = 200_000

KEY_BOND_DENOM = b"BondDenom"


def _validate_bond_denom(value) -> None:
    if not isinstance(value, str):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")


STAKING_KEY_TABLE = MappingProxyType({KEY_BOND_DENOM: _validate_bond_denom})


class InsufficientFeeError(Exception):
    """Raised when a transaction's fee does not meet the requirement."""


@dataclass(frozen=True)
class Context:
    """The execution context an ante check runs in."""

    min_gas_prices: Coins = field(default_factory=Coins)
    is_check_tx: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_gas_prices", Coins(self.min_gas_prices))


@dataclass(frozen=True)
class FeeTx:
    """A transaction carrying a fee, a gas limit and messages.

    Messages are type URLs, or objects with a ``type_url`` attribute.
    """

    fee: Coins = field(default_factory=Coins)
    gas: int = 0
    msgs: Sequence[Any] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fee", Coins(self.fee))
        object.__setattr__(self, "msgs", tuple(self.msgs))


def _msg_type_url(msg) -> str:
    if isinstance(msg, str):
        return msg
    try:
        return msg.type_url
    except AttributeError:
        raise TypeError(f"message {msg!r} has no type URL") from None


AnteHandler = Callable[[Context, FeeTx, bool], Any]


class FeeDecorator:
    """Rejects check-mode transactions whose fee is below the required minimum.

    Transactions made only of bypass message types, within a gas allowance,
    may pay nothing; if they do pay, it must be in a global fee denomination.
    """

    def __init__(self, bypass_min_fee_msg_types: Iterable[str], global_fee_source, staking_source) -> None:
        if not getattr(global_fee_source, "has_key_table", False):
            raise ValueError("global fee paramspace was not set up via module")
        if not getattr(staking_source, "has_key_table", False):
            raise ValueError("staking paramspace was not set up via module")
        self.bypass_min_fee_msg_types = tuple(bypass_min_fee_msg_types)
        self.global_min_fee = global_fee_source
        self.staking_source = staking_source

    def ante_handle(self, ctx: Context, tx, simulate: bool, next_handler: AnteHandler):
        if not isinstance(tx, FeeTx):
            raise TypeError("Tx must be a FeeTx")
        fee_coins = tx.fee.sorted()
        gas = tx.gas
        msgs = tx.msgs

        allowed_to_bypass = (
            self.bypass_min_fee_msgs(msgs)
            and gas <= len(msgs) * MAX_BYPASS_MIN_FEE_MSG_GAS_USAGE
        )
        required_global_fees = self.global_fee(gas)
        local_fees = get_min_gas_price(ctx.min_gas_prices, gas)

        if not ctx.is_check_tx or simulate:
            return next_handler(ctx, tx, simulate)

        if not allowed_to_bypass:
            all_fees = combined_fee_requirement(required_global_fees, local_fees)
            if not denoms_subset_of_including_zero(fee_coins, all_fees):
                raise InsufficientFeeError(
                    f"fee is not a subset of required fees; got {fee_coins}, required: {all_fees}"
                )
            if not is_any_gte_including_zero(fee_coins, all_fees):
                raise InsufficientFeeError(
                    f"insufficient fees; got: {fee_coins} required: {all_fees}"
                )
        elif fee_coins and not denoms_subset_of_including_zero(fee_coins, required_global_fees):
            raise InsufficientFeeError(
                f"fees denom is wrong; got: {fee_coins} required: {required_global_fees}"
            )

        return next_handler(ctx, tx, simulate)

    def global_fee(self, gas: int) -> Coins:
        """Fees the global minimum gas prices require, zero in the bond denom if unset."""
        prices = Coins()
        if self.global_min_fee.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            prices = Coins(self.global_min_fee.get(PARAM_STORE_KEY_MIN_GAS_PRICES))
        if not prices:
            prices = Coins(self.default_zero_global_fee())
        return required_fees(prices, gas)

    def default_zero_global_fee(self) -> list[DecCoin]:
        bond_denom = self._bond_denom()
        if not bond_denom:
            raise ValueError("empty staking bond denomination")
        return [DecCoin(bond_denom, 0)]

    def bypass_min_fee_msgs(self, msgs) -> bool:
        """True if every message is of a bypass type."""
        return all(_msg_type_url(msg) in self.bypass_min_fee_msg_types for msg in msgs)

    def _bond_denom(self) -> str:
        if self.staking_source.has(KEY_BOND_DENOM):
            return self.staking_source.get(KEY_BOND_DENOM)
        return ""