"""Token standard façades and the generic contract handle."""
from .erc20 import Erc20, from_units, to_units
from .erc721 import Erc721
from .erc1155 import Erc1155
from .facade import BaseFacade, FacadeState
from .smart_contract import SmartContract

__all__ = [
    "BaseFacade",
    "Erc20",
    "Erc721",
    "Erc1155",
    "FacadeState",
    "SmartContract",
    "from_units",
    "to_units",
]
