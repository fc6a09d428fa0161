"""Read-only queries of the global fee parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from gaiamods.coins import Coins
from gaiamods.globalfee.params import PARAM_STORE_KEY_MIN_GAS_PRICES


class ParamSource(Protocol):
    """The read-only part of a parameter store."""

    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> Any: ...


@dataclass(frozen=True)
class QueryMinimumGasPricesResponse:
    """The global minimum gas prices currently in force."""

    minimum_gas_prices: Coins = field(default_factory=Coins)


class GrpcQuerier:
    """Answers queries about the global fee module."""

    def __init__(self, param_source: ParamSource) -> None:
        self.param_source = param_source

    def minimum_gas_prices(self, request=None) -> QueryMinimumGasPricesResponse:
        """Return the stored minimum gas prices, empty when none are set."""
        prices = Coins()
        if self.param_source.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            prices = Coins(self.param_source.get(PARAM_STORE_KEY_MIN_GAS_PRICES))
        return QueryMinimumGasPricesResponse(minimum_gas_prices=prices)