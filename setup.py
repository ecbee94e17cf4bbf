"""
Setup script for the rps-client package.

Installs the rps_client library from src/, including the SQL schema
used by the local secret vault.
"""

from setuptools import setup, find_packages

setup(
    name="rps-client",
    version="1.0.0",
    description="Commit-reveal Rock-Paper-Scissors client for an on-chain game contract",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "web3>=7.0.0",
        "eth-account>=0.13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "rps_client._vault": ["schema.sql"],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
