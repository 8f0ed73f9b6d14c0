"""Tests for the extension factory and the guarded accessor."""

import logging

import pytest

from tokenkit.contracts.erc1155 import Erc1155
from tokenkit.contracts.erc721 import Erc721
from tokenkit.contracts.extensions import (
    Erc721Enumerable,
    Erc721LogScanEnumerable,
    Erc1155Burnable,
    Erc1155LogScanEnumerable,
)
from tokenkit.exceptions import (
    CompositeCapabilityUnsatisfied,
    ExtensionNotImplemented,
    StaleContextError,
)
from tokenkit.features import (
    CapabilityName,
    ExtensionFactory,
    HandleTypes,
    StandardFamily,
    SupportLevel,
    assert_enabled,
    requirement,
)

from tests.conftest import FakeContext, descriptor_of, log_scan_descriptor


def erc1155_factory() -> ExtensionFactory:
    return ExtensionFactory(StandardFamily.ERC1155, Erc1155.HANDLE_TYPES)


class TestBuild:

    def test_every_capability_has_an_entry(self):
        context = FakeContext(["IERC1155"])
        features = erc1155_factory().build(context, descriptor_of("IERC1155"))
        assert set(features.handles) == set(features.requirements)

    def test_present_and_absent(self):
        context = FakeContext(["IERC1155", "IBurnableERC1155"])
        features = erc1155_factory().build(context, descriptor_of("IERC1155", "IBurnableERC1155"))

        assert isinstance(features.get(CapabilityName.BURNABLE), Erc1155Burnable)
        assert features.get(CapabilityName.MINTABLE) is None
        assert features.levels[CapabilityName.MINTABLE] == SupportLevel.NONE
        assert features.presence()["Burnable"] is True
        assert features.presence()["Mintable"] is False

    def test_handles_share_the_context(self):
        context = FakeContext()
        features = erc1155_factory().build(
            context, descriptor_of("IERC1155", "IBurnableERC1155", "IMintableERC1155")
        )
        assert features.get("Burnable").context is context
        assert features.get("Mintable").context is context

    def test_build_is_idempotent(self):
        context = FakeContext()
        descriptor = descriptor_of("IERC1155", "IMintableERC1155", "IMulticall")
        first = erc1155_factory().build(context, descriptor)
        second = erc1155_factory().build(context, descriptor)
        assert first.presence() == second.presence()
        assert dict(first.levels) == dict(second.levels)

    def test_records_context_version(self):
        context = FakeContext()
        context.connection.update()
        context.version = context.connection.version
        features = erc1155_factory().build(context, descriptor_of("IERC1155"))
        assert features.context_version == 1

    def test_missing_handle_types(self):
        with pytest.raises(ValueError, match="No handle types registered"):
            ExtensionFactory(StandardFamily.ERC20, {})


class TestComposite:

    def test_batch_mint_without_mint_is_absent(self):
        context = FakeContext()
        features = erc1155_factory().build(context, descriptor_of("IERC1155", "IMulticall"))

        assert features.levels[CapabilityName.BATCH_MINTABLE] == SupportLevel.FULL
        assert features.get(CapabilityName.BATCH_MINTABLE) is None
        unsatisfied = features.unsatisfied[CapabilityName.BATCH_MINTABLE]
        assert unsatisfied.missing_dependency == "Mintable"

    def test_batch_mint_with_mint_is_present(self):
        context = FakeContext()
        features = erc1155_factory().build(
            context, descriptor_of("IERC1155", "IMintableERC1155", "IMulticall")
        )
        assert features.is_present(CapabilityName.BATCH_MINTABLE)
        assert not features.unsatisfied


class TestDegraded:

    def test_partial_enumerable_builds_log_scan_handle(self, caplog):
        context = FakeContext()
        with caplog.at_level(logging.WARNING, logger="tokenkit.features.factory"):
            features = erc1155_factory().build(context, log_scan_descriptor("ERC1155"))

        assert isinstance(features.get(CapabilityName.ENUMERABLE), Erc1155LogScanEnumerable)
        assert features.is_degraded(CapabilityName.ENUMERABLE)
        assert "client-side event log scanning" in caplog.text

    def test_full_enumerable_is_not_degraded(self):
        context = FakeContext()
        factory = ExtensionFactory(StandardFamily.ERC721, Erc721.HANDLE_TYPES)
        features = factory.build(context, descriptor_of("IERC721", "IERC721Enumerable"))

        handle = features.get(CapabilityName.ENUMERABLE)
        assert type(handle) is Erc721Enumerable
        assert not features.is_degraded(CapabilityName.ENUMERABLE)

    def test_partial_without_degraded_type_is_absent(self):
        handle_types = dict(Erc721.HANDLE_TYPES)
        handle_types[CapabilityName.ENUMERABLE] = HandleTypes(Erc721Enumerable)
        factory = ExtensionFactory(StandardFamily.ERC721, handle_types)
        features = factory.build(FakeContext(), log_scan_descriptor("ERC721"))

        assert features.levels[CapabilityName.ENUMERABLE] == SupportLevel.PARTIAL
        assert features.get(CapabilityName.ENUMERABLE) is None

    def test_erc721_partial_uses_log_scan(self):
        factory = ExtensionFactory(StandardFamily.ERC721, Erc721.HANDLE_TYPES)
        features = factory.build(FakeContext(), log_scan_descriptor("ERC721"))
        assert isinstance(features.get("Enumerable"), Erc721LogScanEnumerable)

    def test_baseline_only_has_no_enumeration(self, caplog):
        factory = ExtensionFactory(StandardFamily.ERC721, Erc721.HANDLE_TYPES)
        with caplog.at_level(logging.WARNING, logger="tokenkit.features.factory"):
            features = factory.build(FakeContext(), descriptor_of("IERC721"))

        assert features.levels[CapabilityName.ENUMERABLE] == SupportLevel.NONE
        assert features.get(CapabilityName.ENUMERABLE) is None
        assert "client-side event log scanning" not in caplog.text


class TestAssertEnabled:

    def test_returns_same_handle(self):
        context = FakeContext()
        handle = Erc1155Burnable(context)
        assert assert_enabled(handle, requirement("ERC1155", "Burnable")) is handle

    def test_absent(self):
        with pytest.raises(ExtensionNotImplemented) as excinfo:
            assert_enabled(None, requirement("ERC1155", "Mintable"))
        assert excinfo.value.capability == "Mintable"
        assert excinfo.value.family == "ERC1155"
        assert "IMintableERC1155" in str(excinfo.value)

    def test_composite(self):
        features = erc1155_factory().build(FakeContext(), descriptor_of("IERC1155", "IMulticall"))
        with pytest.raises(CompositeCapabilityUnsatisfied) as excinfo:
            assert_enabled(
                None,
                requirement("ERC1155", "BatchMintable"),
                features.unsatisfied[CapabilityName.BATCH_MINTABLE],
            )
        assert excinfo.value.capability == "BatchMintable"
        assert excinfo.value.missing_dependency == "Mintable"
        assert isinstance(excinfo.value, ExtensionNotImplemented)

    def test_stale_handle(self):
        context = FakeContext()
        handle = Erc1155Burnable(context)
        context.connection.update()
        with pytest.raises(StaleContextError):
            assert_enabled(handle, requirement("ERC1155", "Burnable"))
