# -*- coding: utf-8 -*-

import os
import re

from setuptools import find_packages, setup

extras_require = {
    "test": [
        "pytest>=6.2.5",
        "pytest-cov>=2.10",
        "pytest-xdist>=2.5",
        "eth_abi>=4.0.0",
        "hypothesis>=5.37.1",
    ],
    "lint": [
        "black==23.12.0",
        "flake8==6.1.0",
        "flake8-bugbear==23.12.2",
        "flake8-use-fstring==1.4",
        "isort==5.13.2",
        "mypy==1.5",
    ],
    "dev": ["ipython", "pre-commit", "twine"],
}

extras_require["dev"] = extras_require["test"] + extras_require["lint"] + extras_require["dev"]

with open("README.md", "r") as f:
    long_description = f.read()


# read the version without importing the package, whose dependencies
# may not be installed yet
def _get_version():
    version_file = os.path.join(os.path.dirname(__file__), "abikit", "version.py")
    with open(version_file) as f:
        match = re.search(r'^version = "([^"]+)"$', f.read(), re.MULTILINE)
    if match is None:
        raise RuntimeError(f"Unable to find version string in {version_file}")
    return match.group(1)


setup(
    name="abikit",
    version=_get_version(),
    description="abikit: contract ABI encoding, decoding and method signatures",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="abikit contributors",
    author_email="",
    license="Apache License 2.0",
    keywords="ethereum evm abi smart contract encoding",
    include_package_data=True,
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10,<4",
    install_requires=["pycryptodome>=3.5.1,<4"],
    tests_require=extras_require["test"],
    extras_require=extras_require,
    entry_points={"console_scripts": ["abikit=abikit.cli.abikit_cli:_parse_cli_args"]},
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
