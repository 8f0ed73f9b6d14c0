"""
Setup configuration for the tokenkit package.

This package provides runtime feature detection and extension dispatch for
deployed ERC20, ERC721 and ERC1155 contracts, plus Solana edition supply
helpers.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from package
version_file = Path(__file__).parent / "tokenkit" / "__init__.py"
version = "0.1.0"  # Default version
if version_file.exists():
    with open(version_file) as f:
        for line in f:
            if line.startswith("__version__"):
                version = line.split("=")[1].strip().strip('"').strip("'")
                break

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = ""
if readme_file.exists():
    with open(readme_file, encoding="utf-8") as f:
        long_description = f.read()

setup(
    name="tokenkit",
    version=version,
    author="tokenkit contributors",
    description="Runtime feature detection for ERC20, ERC721 and ERC1155 contracts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    include_package_data=True,
    package_data={
        "tokenkit": [
            "data/interfaces/*.json",
        ],
    },
    install_requires=[
        "web3>=7.0.0",
        "eth-abi>=5.0.0",
        "hexbytes>=1.0.0",
        "aiohttp>=3.9.0",
        "httpx>=0.25.0",
        "pydantic>=2.0.0",
        "solana>=0.34.0",
        "solders>=0.21.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=3.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "tokenkit=tokenkit.cli:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: System :: Distributed Computing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="ethereum, solana, blockchain, erc20, erc721, erc1155, smart-contracts, web3, nft",
)
