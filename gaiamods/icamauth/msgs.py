"""Messages, queries and errors of the interchain account authentication module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

MODULE_NAME = "icamauth"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

DEFAULT_BECH32_PREFIX = "cosmos"

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_MAX_BECH32_LENGTH = 1023
_MAX_ADDRESS_LENGTH = 255


class IcaError(Exception):
    """Base error of the module, with a registered codespace and code."""

    codespace: ClassVar[str] = MODULE_NAME
    code: ClassVar[int] = 1


class IbcAccountAlreadyExistError(IcaError):
    """Raised when an interchain account is registered twice."""

    code = 2


class IbcAccountNotExistError(IcaError):
    """Raised when an interchain account does not exist."""

    code = 3


class InvalidAddressError(IcaError, ValueError):
    """Raised for a missing or malformed account address."""

    codespace = "sdk"
    code = 7


def _polymod(values) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(char) >> 5 for char in hrp] + [0] + [ord(char) & 31 for char in hrp]


def _convert_bits(data, from_bits: int, to_bits: int) -> bytes:
    accumulator = 0
    bits = 0
    result = bytearray()
    max_value = (1 << to_bits) - 1
    for value in data:
        accumulator = (accumulator << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & max_value)
    if bits >= from_bits or (accumulator << (to_bits - bits)) & max_value:
        raise InvalidAddressError("invalid padding in bech32 data")
    return bytes(result)


def _bech32_decode(text: str) -> tuple[str, bytes]:
    if len(text) > _MAX_BECH32_LENGTH:
        raise InvalidAddressError("bech32 string is too long")
    if text.lower() != text and text.upper() != text:
        raise InvalidAddressError("bech32 string has mixed case")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + 7 > len(text):
        raise InvalidAddressError("invalid bech32 separator position")
    hrp, payload = text[:separator], text[separator + 1:]
    if any(ord(char) < 33 or ord(char) > 126 for char in hrp):
        raise InvalidAddressError("invalid character in bech32 prefix")
    try:
        data = [_CHARSET.index(char) for char in payload]
    except ValueError:
        raise InvalidAddressError("invalid character in bech32 data") from None
    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise InvalidAddressError("invalid bech32 checksum")
    return hrp, _convert_bits(data[:-6], 5, 8)


def acc_address_from_bech32(address: str, prefix: str = DEFAULT_BECH32_PREFIX) -> bytes:
    """Decode a bech32 account address carrying ``prefix`` into its raw bytes."""
    if not isinstance(address, str) or not address.strip():
        raise InvalidAddressError("empty address string is not allowed")
    hrp, raw = _bech32_decode(address)
    if hrp != prefix:
        raise InvalidAddressError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
    if not raw:
        raise InvalidAddressError("addresses cannot be empty")
    if len(raw) > _MAX_ADDRESS_LENGTH:
        raise InvalidAddressError(f"address max length is {_MAX_ADDRESS_LENGTH}, got {len(raw)}")
    return raw


@dataclass(frozen=True)
class MsgRegisterAccount:
    """Request to register an interchain account for ``owner`` over a connection."""

    amino_name: ClassVar[str] = "icamauth/MsgRegisterAccount"

    owner: str
    connection_id: str = ""
    version: str = ""

    def validate_basic(self) -> None:
        if not self.owner.strip():
            raise InvalidAddressError("missing sender address")
        try:
            acc_address_from_bech32(self.owner)
        except InvalidAddressError as err:
            raise InvalidAddressError(f"failed to parse address: {self.owner}") from err

    def get_signers(self) -> list[bytes]:
        return [acc_address_from_bech32(self.owner)]


@dataclass(frozen=True)
class MsgSubmitTx:
    """Request to execute ``msg`` on the host chain through an interchain account."""

    amino_name: ClassVar[str] = "icamauth/MsgSubmitTx"

    owner: str
    connection_id: str
    msg: Any

    def validate_basic(self) -> None:
        try:
            acc_address_from_bech32(self.owner)
        except InvalidAddressError as err:
            raise InvalidAddressError("invalid owner address") from err

    def get_signers(self) -> list[bytes]:
        return [acc_address_from_bech32(self.owner)]


def new_msg_submit_tx(msg, connection_id: str, owner: str) -> MsgSubmitTx:
    """Wrap a message for execution; it must carry a ``type_url``."""
    if msg is None or not isinstance(getattr(msg, "type_url", None), str):
        raise TypeError(f"can't proto marshal {type(msg).__name__}")
    return MsgSubmitTx(owner=owner, connection_id=connection_id, msg=msg)


@dataclass(frozen=True)
class QueryInterchainAccountRequest:
    """Query for the interchain account address of an owner on a connection."""

    connection_id: str
    owner: str


@dataclass(frozen=True)
class QueryInterchainAccountResponse:
    """The interchain account address found for a query."""

    interchain_account_address: Optional[str] = None