"""CLI command implementations."""

from .classify import classify
from .network import check_network
from .password import password
from .validate import validate

__all__ = ["check_network", "classify", "password", "validate"]
