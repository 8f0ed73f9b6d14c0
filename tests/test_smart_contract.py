"""Tests for SmartContract generations and network switches."""

from types import SimpleNamespace

import pytest

from tokenkit.contracts import SmartContract
from tokenkit.core.context import Connection
from tokenkit.core.resolver import ResolvedContract
from tokenkit.exceptions import (
    DescriptorFetchFailed,
    ExtensionNotImplemented,
    StaleContextError,
)
from tokenkit.features import CapabilityName, StandardFamily

from tests.conftest import CONTRACT, abi_of, descriptor_of


class FakeResolver:
    """Resolves every address to a fixed set of interfaces."""

    def __init__(self, *interfaces: str):
        self.interfaces = interfaces
        self.calls = 0
        self.error = None

    async def resolve(self, address, abi=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return ResolvedContract(
            address, descriptor_of(*self.interfaces), tuple(abi_of(*self.interfaces))
        )


def fake_w3():
    return SimpleNamespace(eth=SimpleNamespace(contract=lambda address, abi: SimpleNamespace()))


@pytest.fixture
def connection() -> Connection:
    return Connection(fake_w3(), signer_address=CONTRACT)


class TestCreate:

    @pytest.mark.asyncio
    async def test_builds_detected_facades(self, connection):
        contract = await SmartContract.create(
            CONTRACT, connection, resolver=FakeResolver("IERC20", "IBurnableERC20")
        )
        assert contract.families == [StandardFamily.ERC20]
        assert contract.erc20.is_supported(CapabilityName.BURNABLE)
        assert contract.get_address() == CONTRACT

    @pytest.mark.asyncio
    async def test_missing_standard(self, connection):
        contract = await SmartContract.create(CONTRACT, connection, resolver=FakeResolver("IERC20"))
        with pytest.raises(ExtensionNotImplemented) as excinfo:
            contract.erc721
        assert excinfo.value.capability == "ERC721"
        assert "IERC721" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_resolve_failure_builds_nothing(self, connection):
        resolver = FakeResolver("IERC20")
        resolver.error = DescriptorFetchFailed(CONTRACT, "timeout")
        with pytest.raises(DescriptorFetchFailed):
            await SmartContract.create(CONTRACT, connection, resolver=resolver)

    @pytest.mark.asyncio
    async def test_facades_share_one_context(self, connection):
        contract = await SmartContract.create(
            CONTRACT, connection, resolver=FakeResolver("IERC20", "IMintableERC20")
        )
        handle = contract.erc20.features.get(CapabilityName.MINTABLE)
        assert handle.context is contract.context


class TestNetworkUpdate:

    @pytest.mark.asyncio
    async def test_rebuilds_generation(self, connection):
        resolver = FakeResolver("IERC20", "IBurnableERC20")
        contract = await SmartContract.create(CONTRACT, connection, resolver=resolver)
        old = contract.erc20

        await contract.on_network_updated(fake_w3())

        assert resolver.calls == 2
        assert contract.erc20 is not old
        assert contract.erc20.features.context_version == 1
        assert not contract.context.is_stale

    @pytest.mark.asyncio
    async def test_old_handles_turn_stale(self, connection):
        contract = await SmartContract.create(
            CONTRACT, connection, resolver=FakeResolver("IERC20", "IBurnableERC20")
        )
        old = contract.erc20

        await contract.on_network_updated(signer_address=CONTRACT)

        with pytest.raises(StaleContextError):
            await old.burn(1)

    @pytest.mark.asyncio
    async def test_failed_rebuild_keeps_stale_generation(self, connection):
        resolver = FakeResolver("IERC20", "IBurnableERC20")
        contract = await SmartContract.create(CONTRACT, connection, resolver=resolver)
        resolver.error = DescriptorFetchFailed(CONTRACT, "rpc down")

        with pytest.raises(DescriptorFetchFailed):
            await contract.on_network_updated(fake_w3())

        assert contract.context.is_stale
        with pytest.raises(StaleContextError):
            await contract.erc20.burn(1)

    @pytest.mark.asyncio
    async def test_new_network_can_change_extensions(self, connection):
        resolver = FakeResolver("IERC20")
        contract = await SmartContract.create(CONTRACT, connection, resolver=resolver)
        assert not contract.erc20.is_supported(CapabilityName.MINTABLE)

        resolver.interfaces = ("IERC20", "IMintableERC20")
        await contract.on_network_updated(fake_w3())

        assert contract.erc20.is_supported(CapabilityName.MINTABLE)


class TestCall:

    @pytest.mark.asyncio
    async def test_unknown_function(self, connection):
        contract = await SmartContract.create(CONTRACT, connection, resolver=FakeResolver("IERC20"))
        with pytest.raises(ValueError, match="not found"):
            await contract.call("ownerOf", 1)
