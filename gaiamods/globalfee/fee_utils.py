"""Fee arithmetic and comparisons that allow zero-amount coins."""

from __future__ import annotations

from decimal import ROUND_CEILING, localcontext
from typing import Iterable

from gaiamods.coins import Coin, Coins, validate_denom

_MAX_INT64 = 2**63 - 1
_MIN_INT64 = -(2**63)


def required_fees(gas_prices: Iterable, gas: int) -> Coins:
    """Fee per denomination as ceil(price * gas), sorted by denomination."""
    fees = []
    with localcontext() as context:
        context.prec = 100
        for price in gas_prices:
            amount = (price.amount * gas).to_integral_value(rounding=ROUND_CEILING)
            fees.append(Coin(price.denom, int(amount)))
    return Coins(fees).sorted()


def get_min_gas_price(min_gas_prices, gas: int) -> Coins:
    """Fees the local minimum gas prices require; empty if they are all zero."""
    prices = Coins(min_gas_prices)
    if prices.is_zero():
        return Coins()
    return required_fees(prices, gas)


def contain_zero_coins(coins_b) -> bool:
    """True if the set is empty or holds at least one zero coin."""
    coins_b = Coins(coins_b)
    return not coins_b or any(coin.is_zero() for coin in coins_b)


def denoms_subset_of_including_zero(coins, coins_b) -> bool:
    """True if every denomination of ``coins`` appears in ``coins_b``."""
    coins, coins_b = Coins(coins), Coins(coins_b)
    if len(coins) > len(coins_b):
        return False
    if not coins and contain_zero_coins(coins_b):
        return True
    for coin in coins:
        validate_denom(coin.denom)
        if coins_b.find(coin.denom) is None:
            return False
    return True


def is_any_gte_including_zero(coins, coins_b) -> bool:
    """True if some coin reaches the amount ``coins_b`` holds of its denomination.

    ``coins`` is expected to be a denomination subset of ``coins_b``.
    """
    coins, coins_b = Coins(coins), Coins(coins_b)
    if not coins_b:
        return not coins
    if not coins:
        return contain_zero_coins(coins_b)
    return any(
        coins_b.find(coin.denom) is not None and coin.amount >= coins_b.amount_of(coin.denom)
        for coin in coins
    )


def combined_fee_requirement(global_fees, min_gas_prices) -> Coins:
    """Take the larger of the global and local fee for each global denomination."""
    global_fees, min_gas_prices = Coins(global_fees), Coins(min_gas_prices)
    if not min_gas_prices or not global_fees:
        return global_fees
    combined = []
    for fee in global_fees:
        local = min_gas_prices.find(fee.denom)
        combined.append(local if local is not None and local.amount > fee.amount else fee)
    return Coins(combined).sorted()


def get_tx_priority(fee) -> int:
    """Priority from the smallest fee amount; amounts beyond int64 count as its maximum."""
    priority = 0
    for coin in fee:
        amount = coin.amount
        value = amount if _MIN_INT64 <= amount <= _MAX_INT64 else _MAX_INT64
        if priority == 0 or value < priority:
            priority = value
    return priority