"""Tests for the ERC20, ERC721 and ERC1155 façades over a fake context."""

from decimal import Decimal

import pytest

from tokenkit.contracts import Erc20, Erc721, Erc1155, FacadeState, from_units, to_units
from tokenkit.core.constants import MAX_UINT256
from tokenkit.exceptions import (
    CompositeCapabilityUnsatisfied,
    ExtensionNotImplemented,
    FacadeNotBoundError,
    NotFoundError,
    StaleContextError,
)
from tokenkit.features import CapabilityName

from tests.conftest import OTHER, SIGNER, FakeContext, descriptor_of


def bound_erc1155(context, *interfaces, storage=None) -> Erc1155:
    return Erc1155(context, storage).bind(descriptor_of("IERC1155", *interfaces))


class TestBinding:

    def test_unbound_facade(self, erc1155_context):
        facade = Erc1155(erc1155_context)
        assert facade.state == FacadeState.UNBOUND
        with pytest.raises(FacadeNotBoundError):
            facade.is_supported(CapabilityName.BURNABLE)

    @pytest.mark.asyncio
    async def test_unbound_extension_call(self, erc1155_context):
        with pytest.raises(FacadeNotBoundError):
            await Erc1155(erc1155_context).burn(1, 1)
        assert erc1155_context.sent == []

    def test_bind_once(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        assert facade.state == FacadeState.BOUND
        with pytest.raises(ValueError, match="already bound"):
            facade.bind(descriptor_of("IERC1155"))

    def test_get_address(self, erc1155_context):
        assert bound_erc1155(erc1155_context).get_address() == erc1155_context.address


class TestErc1155:

    @pytest.mark.asyncio
    async def test_missing_mint_raises_at_use(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")

        with pytest.raises(ExtensionNotImplemented) as excinfo:
            await facade.mint_to(OTHER, {"metadata": "ipfs://x/0", "supply": 1})

        assert excinfo.value.capability == "Mintable"
        assert excinfo.value.family == "ERC1155"
        assert "IMintableERC1155" in str(excinfo.value)
        assert erc1155_context.sent == []

    @pytest.mark.asyncio
    async def test_burn(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        await facade.burn(7, 2)
        assert erc1155_context.sent == [("burn", [SIGNER, 7, 2], 0)]

    @pytest.mark.asyncio
    async def test_burn_batch_length_mismatch(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        with pytest.raises(ValueError):
            await facade.burn_batch([1, 2], [1])

    def test_supported_extensions(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        assert facade.is_supported(CapabilityName.BURNABLE)
        assert not facade.is_supported(CapabilityName.ENUMERABLE)
        assert not facade.is_supported(CapabilityName.MINTABLE)

    @pytest.mark.asyncio
    async def test_enumeration_missing(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        with pytest.raises(ExtensionNotImplemented) as excinfo:
            await facade.get_all()
        assert excinfo.value.capability == "Enumerable"
        assert excinfo.value.family == "ERC1155"

        with pytest.raises(ExtensionNotImplemented, match="Enumerable"):
            await facade.get_owned(OTHER)
        assert erc1155_context.log_windows == []

    @pytest.mark.asyncio
    async def test_batch_mint_without_mint(self):
        context = FakeContext(["IERC1155", "IMulticall"])
        facade = bound_erc1155(context, "IMulticall")
        with pytest.raises(CompositeCapabilityUnsatisfied) as excinfo:
            await facade.mint_batch_to(OTHER, [{"metadata": "ipfs://x/0", "supply": 1}])
        assert excinfo.value.missing_dependency == "Mintable"

    @pytest.mark.asyncio
    async def test_mint_new_token(self, storage):
        context = FakeContext(["IERC1155", "IMintableERC1155"])
        context.events["TransferSingle"] = [{"id": 4, "value": 10}]
        facade = bound_erc1155(context, "IMintableERC1155", storage=storage)

        result = await facade.mint_to(OTHER, {"metadata": {"name": "Sword"}, "supply": 10})

        assert result.id == 4
        function, args, _value = context.sent[0]
        assert function == "mintTo"
        assert args[0] == OTHER
        assert args[1] == MAX_UINT256
        assert storage.files[args[2]] == {"name": "Sword"}
        assert args[3] == 10

    @pytest.mark.asyncio
    async def test_mint_additional_supply_keeps_uri(self):
        context = FakeContext(["IERC1155", "IMintableERC1155"], reads={"uri": "ipfs://dir/3"})
        facade = bound_erc1155(context, "IMintableERC1155")
        result = await facade.mint_additional_supply_to(OTHER, 3, 5)
        assert result.id == 3
        assert context.sent == [("mintTo", [OTHER, 3, "ipfs://dir/3", 5], 0)]

    @pytest.mark.asyncio
    async def test_batch_mint(self):
        context = FakeContext(["IERC1155", "IMintableERC1155", "IMulticall"])
        context.events["TransferSingle"] = [{"id": 0}, {"id": 1}]
        facade = bound_erc1155(context, "IMintableERC1155", "IMulticall")

        results = await facade.mint_batch_to(
            OTHER,
            [{"metadata": "ipfs://d/0", "supply": 1}, {"metadata": "ipfs://d/1", "supply": 2}],
        )

        assert [r.id for r in results] == [0, 1]
        assert [args for _fn, args in context.encoded] == [
            [OTHER, MAX_UINT256, "ipfs://d/0", 1],
            [OTHER, MAX_UINT256, "ipfs://d/1", 2],
        ]
        assert context.sent[0][0] == "multicall"

    @pytest.mark.asyncio
    async def test_airdrop(self):
        context = FakeContext(["IERC1155", "IMulticall"], reads={"balanceOf": 5})
        facade = bound_erc1155(context, "IMulticall")
        await facade.airdrop(1, [{"address": OTHER, "quantity": 2}, {"address": SIGNER}])
        assert len(context.encoded) == 2
        assert context.encoded[0] == ("safeTransferFrom", [SIGNER, OTHER, 1, 2, b""])

    @pytest.mark.asyncio
    async def test_airdrop_needs_balance(self):
        context = FakeContext(["IERC1155"], reads={"balanceOf": 1})
        facade = bound_erc1155(context)
        with pytest.raises(ValueError, match="owns 1 editions"):
            await facade.airdrop(1, [{"address": OTHER, "quantity": 2}])
        assert context.sent == []

    @pytest.mark.asyncio
    async def test_get_uses_id_placeholder(self, storage):
        hex_id = format(1, "064x")
        storage.files[f"ipfs://dir/{hex_id}"] = {"name": "Shield"}
        context = FakeContext(
            ["IERC1155"],
            reads={"uri": "ipfs://dir/{id}", "totalSupply(uint256)": 12},
        )
        nft = await bound_erc1155(context, storage=storage).get(1)
        assert nft.metadata["name"] == "Shield"
        assert nft.metadata["id"] == 1
        assert nft.supply == 12
        assert nft.type == "ERC1155"

    @pytest.mark.asyncio
    async def test_claim_falls_back_to_plain_claim(self):
        context = FakeContext(["IERC1155", "IClaimableERC1155"])
        facade = bound_erc1155(context, "IClaimableERC1155")
        await facade.claim(2, 3)
        assert context.sent == [("claim(address,uint256,uint256)", [SIGNER, 2, 3], 0)]

    @pytest.mark.asyncio
    async def test_stale_extension_call(self, erc1155_context):
        facade = bound_erc1155(erc1155_context, "IBurnableERC1155")
        erc1155_context.connection.update()
        with pytest.raises(StaleContextError):
            await facade.burn(1, 1)
        assert erc1155_context.sent == []


class TestErc721:

    @pytest.mark.asyncio
    async def test_baseline_contract_is_not_enumerable(self):
        context = FakeContext(["IERC721"])
        facade = Erc721(context).bind(descriptor_of("IERC721"))

        assert not facade.is_supported(CapabilityName.ENUMERABLE)
        with pytest.raises(ExtensionNotImplemented) as excinfo:
            await facade.get_all()
        assert excinfo.value.capability == "Enumerable"
        assert "IERC721Enumerable" in str(excinfo.value)

        with pytest.raises(ExtensionNotImplemented):
            await facade.get_owned_token_ids(OTHER)
        assert context.log_windows == []

    @pytest.mark.asyncio
    async def test_mint_returns_token_id(self):
        context = FakeContext(["IERC721", "IMintableERC721"])
        context.events["Transfer"] = [{"from": OTHER, "to": SIGNER, "tokenId": 9}]
        facade = Erc721(context).bind(descriptor_of("IERC721", "IMintableERC721"))

        result = await facade.mint("ipfs://meta/0")

        assert result.id == 9
        assert context.sent == [("mintTo", [SIGNER, "ipfs://meta/0"], 0)]

    @pytest.mark.asyncio
    async def test_mint_without_storage_needs_uri(self):
        context = FakeContext(["IERC721", "IMintableERC721"])
        facade = Erc721(context).bind(descriptor_of("IERC721", "IMintableERC721"))
        with pytest.raises(ValueError, match="storage backend"):
            await facade.mint({"name": "No storage"})

    @pytest.mark.asyncio
    async def test_burn_missing(self):
        context = FakeContext(["IERC721"])
        facade = Erc721(context).bind(descriptor_of("IERC721"))
        with pytest.raises(ExtensionNotImplemented) as excinfo:
            await facade.burn(1)
        assert excinfo.value.capability == "Burnable"
        assert excinfo.value.family == "ERC721"

    @pytest.mark.asyncio
    async def test_next_token_id_falls_back_to_total_supply(self):
        context = FakeContext(["IERC721"], reads={"totalSupply": 42})
        facade = Erc721(context).bind(descriptor_of("IERC721"))
        assert await facade.next_token_id_to_mint() == 42

    @pytest.mark.asyncio
    async def test_next_token_id_unavailable(self):
        context = FakeContext(["IERC721"])
        facade = Erc721(context).bind(descriptor_of("IERC721"))
        with pytest.raises(NotFoundError):
            await facade.next_token_id_to_mint()

    @pytest.mark.asyncio
    async def test_get(self):
        context = FakeContext(["IERC721"], reads={"ownerOf": OTHER, "tokenURI": "ipfs://m/5"})
        nft = await Erc721(context).bind(descriptor_of("IERC721")).get(5)
        assert nft.owner == OTHER
        assert nft.metadata == {"id": 5, "uri": "ipfs://m/5"}
        assert nft.supply == 1


class TestErc20:

    @pytest.mark.asyncio
    async def test_transfer_scales_amount(self):
        context = FakeContext(["IERC20"], reads={"decimals": 18})
        facade = Erc20(context).bind(descriptor_of("IERC20"))
        await facade.transfer(OTHER, "1.5")
        assert context.sent == [("transfer", [OTHER, 1500000000000000000], 0)]

    @pytest.mark.asyncio
    async def test_balance_is_decimal(self):
        context = FakeContext(["IERC20"], reads={"decimals": 6, "balanceOf": 2_500_000})
        facade = Erc20(context).bind(descriptor_of("IERC20"))
        assert await facade.balance() == Decimal("2.5")

    @pytest.mark.asyncio
    async def test_batch_mint(self):
        context = FakeContext(["IERC20", "IMintableERC20", "IMulticall"], reads={"decimals": 2})
        facade = Erc20(context).bind(descriptor_of("IERC20", "IMintableERC20", "IMulticall"))
        await facade.mint_batch_to([
            {"to_address": OTHER, "amount": 1},
            {"to_address": SIGNER, "amount": "0.25"},
        ])
        assert context.encoded == [("mintTo", [OTHER, 100]), ("mintTo", [SIGNER, 25])]
        assert context.sent[0][0] == "multicall"

    @pytest.mark.asyncio
    async def test_missing_mint_does_not_read_decimals(self):
        context = FakeContext(["IERC20"])
        facade = Erc20(context).bind(descriptor_of("IERC20"))
        with pytest.raises(ExtensionNotImplemented):
            await facade.mint_to(OTHER, 1)

    def test_no_enumerable_extension(self):
        context = FakeContext(["IERC20"])
        facade = Erc20(context).bind(descriptor_of("IERC20"))
        assert "Enumerable" not in facade.features.presence()


class TestAmounts:

    def test_to_units(self):
        assert to_units("100.5", 18) == 100_500_000_000_000_000_000
        assert to_units(3, 0) == 3

    def test_to_units_rejects_excess_precision(self):
        with pytest.raises(ValueError):
            to_units("0.001", 2)

    def test_from_units(self):
        assert from_units(1_234_500, 6) == Decimal("1.2345")
