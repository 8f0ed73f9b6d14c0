#!/usr/bin/env python3
"""Validate that all bundled interfaces load and feed the capability tables"""

import sys
from pathlib import Path

# Add parent directory to path so we can import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from tokenkit.artifacts.loader import (
    get_abi,
    list_available_interfaces,
)
from tokenkit.features.names import StandardFamily
from tokenkit.features.registry import requirements_for


def validate():
    """Validate that every interface is loadable and every capability has selectors"""
    print("Validating package...")

    interfaces = list_available_interfaces()
    print(f"\nFound {len(interfaces)} bundled interfaces:")

    all_valid = True
    for name in interfaces:
        try:
            abi = get_abi(name)
        except (FileNotFoundError, ValueError) as e:
            print(f"  ❌ {name}: {e}")
            all_valid = False
            continue

        if not abi:
            print(f"  ⚠️  {name}: No ABI found")
            all_valid = False
        else:
            print(f"  ✅ {name}: {len(abi)} ABI items")

    print("\nCapability tables:")
    for family in StandardFamily:
        for capability, requirement in requirements_for(family).items():
            if not requirement.selectors:
                print(f"  ❌ {family} {capability}: no selectors")
                all_valid = False
        print(f"  ✅ {family}: {len(requirements_for(family))} extensions")

    print()
    if all_valid:
        print("✅ All interfaces valid!")
        return 0
    else:
        print("❌ Some interfaces failed validation")
        return 1


if __name__ == "__main__":
    sys.exit(validate())
