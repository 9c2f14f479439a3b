"""Entity package: Address."""

from .entity import Address
from .repository import AddressRepository
from .table import AddressTable

__all__ = ["Address", "AddressRepository", "AddressTable"]
