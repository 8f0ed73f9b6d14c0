"""Tests for the tokenkit command-line tool."""

import json

from click.testing import CliRunner

from tokenkit import __version__
from tokenkit.cli import cli
from tokenkit.exceptions import DescriptorFetchFailed

from tests.conftest import CONTRACT, abi_of, members_of


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_interfaces():
    result = CliRunner().invoke(cli, ["interfaces"])
    assert result.exit_code == 0
    assert "IMintableERC1155" in result.output


def test_detect_with_abi(tmp_path):
    abi_file = tmp_path / "artifact.json"
    abi_file.write_text(json.dumps({"abi": abi_of("IERC1155", "IBurnableERC1155")}))

    result = CliRunner().invoke(
        cli,
        ["detect", CONTRACT, "--rpc-url", "http://127.0.0.1:8545", "--abi", str(abi_file), "--json"],
    )

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["source"] == "abi"
    levels = report["families"]["ERC1155"]
    assert levels["Burnable"] == "FULL"
    assert levels["Mintable"] == "NONE"
    assert levels["Enumerable"] == "NONE"


def test_detect_partial_enumeration(tmp_path):
    abi = abi_of("IERC721") + members_of("IERC721Enumerable", "totalSupply")
    abi_file = tmp_path / "abi.json"
    abi_file.write_text(json.dumps(abi))

    result = CliRunner().invoke(
        cli,
        ["detect", CONTRACT, "--rpc-url", "http://127.0.0.1:8545", "--abi", str(abi_file), "--json"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["families"]["ERC721"]["Enumerable"] == "PARTIAL"


def test_detect_failure(monkeypatch):
    async def unreachable(address, rpc_url, abi):
        raise DescriptorFetchFailed(address, "connection refused")

    monkeypatch.setattr("tokenkit.cli._detect", unreachable)
    result = CliRunner().invoke(cli, ["detect", CONTRACT, "--rpc-url", "http://127.0.0.1:1"])

    assert result.exit_code == 1
    assert "connection refused" in result.output
