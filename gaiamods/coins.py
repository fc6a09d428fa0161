"""Coins with integer amounts, coins with decimal amounts, and sets of them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable, Union

_DENOM_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")
_DEC_PLACES = 18


class CoinError(ValueError):
    """Raised for an invalid coin or coin set."""


def validate_denom(denom) -> None:
    """Raise CoinError unless ``denom`` is a well-formed denomination."""
    if not isinstance(denom, str) or _DENOM_RE.fullmatch(denom) is None:
        raise CoinError(f"invalid denom: {denom}")


def _to_decimal(value) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("decimal amount must be a number or a string, not bool")
    if isinstance(value, float):
        value = str(value)
    if not isinstance(value, (int, str, Decimal)):
        raise TypeError(f"decimal amount must be a number or a string, not {type(value).__name__}")
    try:
        result = Decimal(value)
    except InvalidOperation as err:
        raise CoinError(f"invalid decimal amount: {value!r}") from err
    if not result.is_finite():
        raise CoinError(f"invalid decimal amount: {value!r}")
    return result


@dataclass(frozen=True)
class Coin:
    """A whole-number amount of one denomination."""

    denom: str
    amount: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError(f"coin amount must be an int, not {type(self.amount).__name__}")

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class DecCoin:
    """A decimal amount of one denomination, such as a gas price."""

    denom: str
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __str__(self) -> str:
        return f"{self.amount:.{_DEC_PLACES}f}{self.denom}"


AnyCoin = Union[Coin, DecCoin]


class Coins(tuple):
    """An immutable sequence of coins."""

    def __new__(cls, coins: Iterable[AnyCoin] = ()):
        return super().__new__(cls, coins)

    def sorted(self) -> "Coins":
        """Return the coins ordered by denomination."""
        return Coins(sorted(self, key=lambda coin: coin.denom))

    def find(self, denom: str):
        """Return the coin of ``denom``, or None if there is none."""
        return next((coin for coin in self if coin.denom == denom), None)

    def amount_of(self, denom: str):
        """Return the amount held of ``denom``, zero if absent."""
        coin = self.find(denom)
        return 0 if coin is None else coin.amount

    def is_zero(self) -> bool:
        """True if the set is empty or every coin in it is zero."""
        return all(coin.is_zero() for coin in self)

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self)

    def __repr__(self) -> str:
        return f"Coins({list(self)!r})"


def new_coins(*coins: AnyCoin) -> Coins:
    """Build a valid coin set: zero coins dropped, sorted, no duplicates."""
    kept = sorted((coin for coin in coins if not coin.is_zero()), key=lambda coin: coin.denom)
    previous = None
    for coin in kept:
        validate_denom(coin.denom)
        if coin.is_negative():
            raise CoinError(f"coin {coin} amount is not positive")
        if coin.denom == previous:
            raise CoinError(f"duplicate denomination {coin.denom}")
        previous = coin.denom
    return Coins(kept)