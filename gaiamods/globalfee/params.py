"""Parameters of the global fee module and a parameter store for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from gaiamods.coins import CoinError, Coins, DecCoin, validate_denom

MODULE_NAME = "globalfee"
QUERIER_ROUTE = MODULE_NAME

PARAM_STORE_KEY_MIN_GAS_PRICES = b"MinimumGasPricesParam"


class ParamError(ValueError):
    """Raised when module parameters are invalid."""


def validate_dec_coins(coins) -> None:
    """Check that coins are sorted, unique, non-negative and well named."""
    coins = list(coins)
    if not coins:
        return
    first, *rest = coins
    _check_denom(first.denom)
    if first.is_negative():
        raise ParamError(f"coin {first} amount is negative")

    low = first.denom
    seen = {low}
    for coin in rest:
        if coin.denom in seen:
            raise ParamError(f"duplicate denomination {coin.denom}")
        _check_denom(coin.denom)
        if coin.denom <= low:
            raise ParamError(f"denomination {coin.denom} is not sorted")
        if coin.is_negative():
            raise ParamError(f"coin {coin.denom} amount is negative")
        low = coin.denom
        seen.add(coin.denom)


def _check_denom(denom) -> None:
    try:
        validate_denom(denom)
    except CoinError as err:
        raise ParamError(str(err)) from err


def validate_minimum_gas_prices(value) -> None:
    """Validate a minimum gas price list; it must hold DecCoins only."""
    if not isinstance(value, (list, tuple)) or not all(isinstance(coin, DecCoin) for coin in value):
        raise TypeError(f"type: {type(value).__name__}, expected DecCoins")
    validate_dec_coins(value)


@dataclass
class Params:
    """Global fee parameters: the minimum gas price per denomination."""

    minimum_gas_prices: Coins = field(default_factory=Coins)

    def __post_init__(self) -> None:
        if isinstance(self.minimum_gas_prices, (list, tuple)) and not isinstance(
            self.minimum_gas_prices, Coins
        ):
            self.minimum_gas_prices = Coins(self.minimum_gas_prices)

    def validate_basic(self) -> None:
        validate_minimum_gas_prices(self.minimum_gas_prices)


def default_params() -> Params:
    return Params(minimum_gas_prices=Coins())


KEY_TABLE: Mapping[bytes, Callable[[Any], None]] = MappingProxyType(
    {PARAM_STORE_KEY_MIN_GAS_PRICES: validate_minimum_gas_prices}
)


class ParamStore:
    """An in-memory parameter space keyed by byte strings."""

    def __init__(self, key_table: Optional[Mapping[bytes, Callable[[Any], None]]] = None) -> None:
        self.key_table = dict(key_table) if key_table is not None else None
        self._values: dict[bytes, Any] = {}

    @property
    def has_key_table(self) -> bool:
        return self.key_table is not None

    def has(self, key) -> bool:
        return bytes(key) in self._values

    def get(self, key):
        key = bytes(key)
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"parameter {key.decode(errors='replace')} is not set") from None

    def set(self, key, value) -> None:
        key = bytes(key)
        if self.key_table is not None and key not in self.key_table:
            raise KeyError(f"parameter {key.decode(errors='replace')} is not registered")
        self._values[key] = value

    def set_param_set(self, params: Params) -> None:
        """Validate and store every global fee parameter."""
        validate_minimum_gas_prices(params.minimum_gas_prices)
        self.set(PARAM_STORE_KEY_MIN_GAS_PRICES, Coins(params.minimum_gas_prices))

    def get_param_set(self) -> Params:
        return Params(minimum_gas_prices=self.get(PARAM_STORE_KEY_MIN_GAS_PRICES))