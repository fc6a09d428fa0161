import pytest

from gaiamods.icamauth.ibc_module import IBCModule, IcaAppModule
from gaiamods.icamauth.keeper import Keeper, channel_capability_path


class FakeScoped:
    def __init__(self):
        self.caps = {}

    def claim_capability(self, capability, name):
        if name in self.caps:
            raise RuntimeError("already claimed")
        self.caps[name] = capability

    def get_capability(self, name):
        return self.caps.get(name)


@pytest.fixture
def module_and_scoped():
    scoped = FakeScoped()
    return IBCModule(Keeper(object(), scoped)), scoped


def test_open_init_claims_capability_and_returns_version(module_and_scoped):
    module, scoped = module_and_scoped
    capability = object()
    version = module.on_chan_open_init(None, ["connection-0"], "port-a", "channel-0", capability, None, "v1")
    assert version == "v1"
    assert scoped.caps == {channel_capability_path("port-a", "channel-0"): capability}


def test_open_init_propagates_claim_error(module_and_scoped):
    module, _ = module_and_scoped
    module.on_chan_open_init(None, [], "port-a", "channel-0", object(), None, "v1")
    with pytest.raises(RuntimeError, match="already claimed"):
        module.on_chan_open_init(None, [], "port-a", "channel-0", object(), None, "v1")


def test_capability_path_contains_port_and_channel():
    path = channel_capability_path("port-a", "channel-7")
    assert path.endswith("port-a/channels/channel-7")


def test_open_try_and_negotiation_return_empty_version(module_and_scoped):
    module, _ = module_and_scoped
    assert module.on_chan_open_try(None, [], "p", "c", object(), None, "v1") == ""
    assert module.negotiate_app_version(None, "connection-0", "p", None, "v1") == ""


def test_recv_packet_returns_error_acknowledgement(module_and_scoped):
    module, _ = module_and_scoped
    ack = module.on_recv_packet(object(), b"relayer")
    assert ack.success is False
    assert "cannot receive packet via interchain accounts authentication module" in ack.error


def test_other_callbacks_accept(module_and_scoped):
    module, scoped = module_and_scoped
    results = [
        module.on_chan_open_ack("p", "c", "cc", "v1"),
        module.on_chan_open_confirm("p", "c"),
        module.on_chan_close_init("p", "c"),
        module.on_chan_close_confirm("p", "c"),
        module.on_acknowledgement_packet(object(), b"ack", b"relayer"),
        module.on_timeout_packet(object(), b"relayer"),
    ]
    assert results == [None] * 6
    assert scoped.caps == {}


def test_app_module_genesis_is_empty():
    module = IcaAppModule()
    assert module.name == "icamauth"
    assert module.default_genesis() is None
    assert module.validate_genesis(b"{}") is None
    assert module.init_genesis(b"{}") == []
    assert module.export_genesis() is None