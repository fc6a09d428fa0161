"""Keeper, message server and queries of the interchain account auth module."""

from __future__ import annotations

import dataclasses
import enum
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Protocol, Sequence

from gaiamods.icamauth.msgs import (
    MODULE_NAME,
    IcaError,
    InvalidAddressError,
    MsgRegisterAccount,
    MsgSubmitTx,
    QueryInterchainAccountRequest,
    QueryInterchainAccountResponse,
)

CONTROLLER_PORT_PREFIX = "icacontroller-"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SUBMIT_TIMEOUT = timedelta(minutes=1)


class NotFoundError(IcaError, LookupError):
    """Raised when a looked-up item does not exist."""


class ActiveChannelNotFoundError(NotFoundError):
    """Raised when no active channel exists for a connection and port."""


class CapabilityNotFoundError(NotFoundError):
    """Raised when the module does not own a channel capability."""


class PacketType(enum.IntEnum):
    UNSPECIFIED = 0
    EXECUTE_TX = 1


@dataclass(frozen=True)
class InterchainAccountPacketData:
    """Packet sent to the host chain."""

    type: PacketType
    data: bytes
    memo: str = ""


class ControllerKeeper(Protocol):
    def register_interchain_account(self, connection_id: str, owner: str, version: str) -> None: ...

    def get_active_channel_id(self, connection_id: str, port_id: str) -> Optional[str]: ...

    def get_interchain_account_address(self, connection_id: str, port_id: str) -> Optional[str]: ...

    def send_tx(self, capability, connection_id: str, port_id: str,
                packet_data: InterchainAccountPacketData, timeout_timestamp: int) -> Any: ...


class ScopedKeeper(Protocol):
    def claim_capability(self, capability, name: str) -> None: ...

    def get_capability(self, name: str) -> Any: ...


def new_controller_port_id(owner: str) -> str:
    """Port identifier the controller uses for ``owner``."""
    if not owner or not owner.strip():
        raise InvalidAddressError("owner address cannot be empty")
    return f"{CONTROLLER_PORT_PREFIX}{owner}"


def channel_capability_path(port_id: str, channel_id: str) -> str:
    return f"capabilities/ports/{port_id}/channels/{channel_id}"


def _msg_fields(msg) -> dict:
    if dataclasses.is_dataclass(msg) and not isinstance(msg, type):
        return dataclasses.asdict(msg)
    if hasattr(msg, "__dict__"):
        return {key: value for key, value in vars(msg).items() if not key.startswith("_")}
    return {}


def _serialize_cosmos_tx(msgs: Sequence[Any]) -> bytes:
    messages = []
    for msg in msgs:
        type_url = getattr(msg, "type_url", None)
        if not isinstance(type_url, str):
            raise TypeError(f"cannot serialize message of type {type(msg).__name__}")
        messages.append({"@type": type_url, **_msg_fields(msg)})
    document = {"messages": messages}
    return json.dumps(document, separators=(",", ":"), sort_keys=True, default=str).encode()


def _unix_nanos(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = moment - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 10**9 + delta.microseconds * 1_000


class Keeper:
    """Holds the controller keeper and the module's scoped capabilities."""

    def __init__(
        self,
        ica_controller_keeper: ControllerKeeper,
        scoped_keeper: ScopedKeeper,
        serializer: Optional[Callable[[Sequence[Any]], bytes]] = None,
    ) -> None:
        self.ica_controller_keeper = ica_controller_keeper
        self.scoped_keeper = scoped_keeper
        self.serializer = serializer or _serialize_cosmos_tx
        self.logger = logging.getLogger(f"x/{MODULE_NAME}")

    def claim_capability(self, capability, name: str) -> None:
        """Claim a channel capability handed over when a channel opens."""
        self.scoped_keeper.claim_capability(capability, name)

    def interchain_account(self, request: QueryInterchainAccountRequest) -> QueryInterchainAccountResponse:
        try:
            port_id = new_controller_port_id(request.owner)
        except InvalidAddressError as err:
            raise InvalidAddressError(f"could not find account: {err}") from err
        address = self.ica_controller_keeper.get_interchain_account_address(request.connection_id, port_id)
        if address is None:
            raise NotFoundError(f"no account found for portID {port_id}")
        return QueryInterchainAccountResponse(address)


class MsgServer:
    """Handles the module's transaction messages."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def register_account(self, msg: MsgRegisterAccount) -> None:
        self.keeper.ica_controller_keeper.register_interchain_account(
            msg.connection_id, msg.owner, msg.version
        )

    def submit_tx(self, msg: MsgSubmitTx, block_time: datetime) -> None:
        """Send ``msg.msg`` to the host chain, timing out a minute after ``block_time``."""
        keeper = self.keeper
        port_id = new_controller_port_id(msg.owner)

        channel_id = keeper.ica_controller_keeper.get_active_channel_id(msg.connection_id, port_id)
        if channel_id is None:
            raise ActiveChannelNotFoundError(f"failed to retrieve active channel for port {port_id}")

        capability = keeper.scoped_keeper.get_capability(channel_capability_path(port_id, channel_id))
        if capability is None:
            raise CapabilityNotFoundError("module does not own channel capability")

        data = keeper.serializer([msg.msg])
        packet = InterchainAccountPacketData(type=PacketType.EXECUTE_TX, data=data)
        timeout = _unix_nanos(block_time + _SUBMIT_TIMEOUT) % (1 << 64)
        keeper.ica_controller_keeper.send_tx(capability, msg.connection_id, port_id, packet, timeout)