# setup.py
from setuptools import setup, find_packages

setup(
    name="flint",
    version="0.1.0",
    description="Flint: a small statically-typed scripting language with a tree-walking interpreter",
    packages=find_packages(include=["flint", "flint.*", "flint_lsp", "flint_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": [
            "flint=flint.cli:main",
            "flint-ls=flint_lsp.server:main",
        ],
    },
    zip_safe=False,
)
