"""Address repository."""

from sqlmodel import Session

from src.marketplace.entities.service.address.entity import Address
from src.marketplace.entities.service.address.table import AddressTable


class AddressRepository:
    """Data-access layer for addresses."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, address_id: str) -> Address | None:
        row = self._session.get(AddressTable, address_id)
        if row is None or row.deleted_at is not None:
            return None
        return Address.model_validate(row, from_attributes=True)

    def create(self, address: Address) -> Address:
        row = AddressTable.model_validate(address.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Address.model_validate(row, from_attributes=True)

    def get_owned(self, address_id: str, user_id: str) -> Address | None:
        """Return the address only when it belongs to ``user_id``."""
        address = self.get(address_id)
        if address is None or address.user_id != user_id:
            return None
        return address
