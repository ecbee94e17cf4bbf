# Area: Vault
"""
Durable local storage for commitment secrets.
"""

from .database import connect, init_database
from .secret_vault import SecretVault

__all__ = ["SecretVault", "connect", "init_database"]
