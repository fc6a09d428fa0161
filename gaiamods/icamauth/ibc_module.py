"""Channel callbacks and application module of the interchain account auth module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from gaiamods.icamauth.keeper import Keeper, channel_capability_path
from gaiamods.icamauth.msgs import MODULE_NAME, QUERIER_ROUTE, ROUTER_KEY


@dataclass(frozen=True)
class ErrorAcknowledgement:
    """Acknowledgement reporting that a packet could not be handled."""

    error: str

    @property
    def success(self) -> bool:
        return False


@dataclass(frozen=True)
class CallbackEvent:
    """One callback the module was given, as kept in its history."""

    callback: str
    details: dict = field(default_factory=dict)


class IBCModule:
    """Channel handshake and packet callbacks for a controller chain.

    Callbacks that the controller accepts without further action are kept in
    ``history`` so that the handshake and packet flow can be inspected.
    """

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper
        self.history: List[CallbackEvent] = []

    def _record(self, callback: str, **details: Any) -> None:
        self.history.append(CallbackEvent(callback, details))

    def on_chan_open_init(self, order, connection_hops: Sequence[str], port_id: str, channel_id: str,
                          channel_capability, counterparty, version: str) -> str:
        """Claim the channel capability and accept the proposed version."""
        self.keeper.claim_capability(channel_capability, channel_capability_path(port_id, channel_id))
        return version

    def on_chan_open_try(self, order, connection_hops, port_id, channel_id,
                         channel_capability, counterparty, counterparty_version) -> str:
        """A controller never answers a handshake; it agrees to no version."""
        self._record("chan_open_try", port_id=port_id, channel_id=channel_id,
                     counterparty_version=counterparty_version)
        return ""

    def on_chan_open_ack(self, port_id, channel_id, counterparty_channel_id, counterparty_version) -> None:
        """Accept the acknowledgement of an opening channel."""
        self._record("chan_open_ack", port_id=port_id, channel_id=channel_id,
                     counterparty_channel_id=counterparty_channel_id,
                     counterparty_version=counterparty_version)

    def on_chan_open_confirm(self, port_id, channel_id) -> None:
        """Accept the confirmation of an opening channel."""
        self._record("chan_open_confirm", port_id=port_id, channel_id=channel_id)

    def on_chan_close_init(self, port_id, channel_id) -> None:
        """Accept a channel being closed from this end."""
        self._record("chan_close_init", port_id=port_id, channel_id=channel_id)

    def on_chan_close_confirm(self, port_id, channel_id) -> None:
        """Accept the confirmation of a closed channel."""
        self._record("chan_close_confirm", port_id=port_id, channel_id=channel_id)

    def on_recv_packet(self, packet, relayer) -> ErrorAcknowledgement:
        """The controller never accepts incoming packets."""
        return ErrorAcknowledgement(
            "cannot receive packet via interchain accounts authentication module: invalid request"
        )

    def on_acknowledgement_packet(self, packet, acknowledgement: bytes, relayer) -> None:
        """Accept an acknowledgement; the host's result is not checked."""
        self._record("acknowledgement_packet", packet=packet,
                     acknowledgement=bytes(acknowledgement), relayer=relayer)

    def on_timeout_packet(self, packet, relayer) -> None:
        """Accept a packet that timed out."""
        self._record("timeout_packet", packet=packet, relayer=relayer)

    def negotiate_app_version(self, order, connection_id, port_id, counterparty, proposed_version) -> str:
        """No version is negotiated by this module."""
        self._record("negotiate_app_version", connection_id=connection_id, port_id=port_id,
                     proposed_version=proposed_version)
        return ""


GenesisMessage = Optional[Union[bytes, bytearray, str]]


class IcaAppModule:
    """The module as the application sees it: it keeps no genesis state."""

    name = MODULE_NAME
    route = ROUTER_KEY
    querier_route = QUERIER_ROUTE
    consensus_version = 1

    # The module has no genesis state, so its genesis document is empty.
    _EMPTY_GENESIS: GenesisMessage = None

    def __init__(self, keeper: Optional[Keeper] = None) -> None:
        self.keeper = keeper
        self.genesis_initialized = False

    def default_genesis(self) -> GenesisMessage:
        """The default genesis document: empty, as the module keeps no state."""
        return self._EMPTY_GENESIS

    def validate_genesis(self, message: GenesisMessage) -> None:
        """Accept any genesis document given as raw bytes, text or nothing."""
        if message is not None and not isinstance(message, (bytes, bytearray, str)):
            raise TypeError(
                f"genesis message must be bytes, str or None, not {type(message).__name__}"
            )

    def init_genesis(self, message: GenesisMessage) -> list:
        """Mark the module initialised; it yields no validator updates."""
        self.validate_genesis(message)
        self.genesis_initialized = True
        return []

    def export_genesis(self) -> GenesisMessage:
        """Export the (empty) genesis document of the module."""
        return self.default_genesis()