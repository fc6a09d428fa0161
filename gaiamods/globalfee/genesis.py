"""Genesis state of the global fee module and its application module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

from gaiamods.coins import CoinError, Coins, DecCoin
from gaiamods.globalfee.params import (
    KEY_TABLE,
    MODULE_NAME,
    QUERIER_ROUTE,
    ParamError,
    Params,
    ParamStore,
    default_params,
)

RawMessage = Union[bytes, str]


@dataclass
class GenesisState:
    """The module's state at chain start: its parameters."""

    params: Params = field(default_factory=default_params)


def default_genesis_state() -> GenesisState:
    return GenesisState(params=default_params())


def validate_genesis(state: GenesisState) -> None:
    try:
        state.params.validate_basic()
    except ParamError as err:
        raise ParamError(f"globalfee params: {err}") from err


def _dec_coin_from_json(item) -> DecCoin:
    if not isinstance(item, dict):
        raise ParamError(f"invalid coin entry: {item!r}")
    denom = item.get("denom", "")
    amount = item.get("amount", "0")
    if not isinstance(denom, str) or not isinstance(amount, str):
        raise ParamError(f"invalid coin entry: {item!r}")
    try:
        return DecCoin(denom, amount)
    except CoinError as err:
        raise ParamError(str(err)) from err


def decode_genesis(message: RawMessage) -> GenesisState:
    """Parse a JSON genesis document."""
    try:
        document = json.loads(message)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise ParamError(f"invalid genesis JSON: {err}") from err
    if not isinstance(document, dict):
        raise ParamError("genesis must be a JSON object")
    params = document.get("params") or {}
    if not isinstance(params, dict):
        raise ParamError("params must be a JSON object")
    prices = params.get("minimum_gas_prices") or []
    if not isinstance(prices, list):
        raise ParamError("minimum_gas_prices must be a JSON array")
    return GenesisState(Params(Coins(_dec_coin_from_json(item) for item in prices)))


def encode_genesis(state: GenesisState) -> bytes:
    """Serialise a genesis state as compact JSON."""
    prices = [
        {"denom": coin.denom, "amount": f"{coin.amount:.18f}"}
        for coin in state.params.minimum_gas_prices
    ]
    document = {"params": {"minimum_gas_prices": prices}}
    return json.dumps(document, separators=(",", ":")).encode()


def genesis_from_app_state(app_state: Mapping[str, Optional[RawMessage]]) -> GenesisState:
    """Extract this module's genesis from the whole application state."""
    message = app_state.get(MODULE_NAME)
    if message is None:
        return GenesisState(Params())
    return decode_genesis(message)


class AppModule:
    """The global fee module: genesis handling over a parameter store."""

    name = MODULE_NAME
    querier_route = QUERIER_ROUTE
    consensus_version = 1

    def __init__(self, param_store: Optional[ParamStore] = None) -> None:
        if param_store is None:
            param_store = ParamStore(KEY_TABLE)
        elif not param_store.has_key_table:
            param_store.key_table = dict(KEY_TABLE)
        self.param_store = param_store

    def default_genesis(self) -> bytes:
        return encode_genesis(default_genesis_state())

    def validate_genesis(self, message: RawMessage) -> None:
        state = decode_genesis(message)
        try:
            state.params.validate_basic()
        except ParamError as err:
            raise ParamError(f"params: {err}") from err

    def init_genesis(self, message: RawMessage) -> None:
        state = decode_genesis(message)
        self.param_store.set_param_set(state.params)

    def export_genesis(self) -> bytes:
        return encode_genesis(GenesisState(self.param_store.get_param_set()))