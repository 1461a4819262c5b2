"""Client repository - load/save of the clients document"""

from typing import Any, Optional

from ...shared.constants import CLIENTS_KEY
from ...shared.exceptions import StorageError
from ...shared.records import decode_record
from ...storage.base import JSONStore
from ...storage.locks import key_lock
from .schemas import Client

# Stand-ins for required fields missing from a malformed stored client
CLIENT_PLACEHOLDERS = {"id": "", "name": "", "street": "", "house_number": ""}


def decode_clients(raw: Any) -> list[Client]:
    if not raw:
        return []
    if not isinstance(raw, list):
        raise StorageError("Malformed clients: expected a list")
    return [decode_record(Client, item, CLIENT_PLACEHOLDERS) for item in raw]


class ClientRepository:
    """Repository for saved client addresses"""

    def __init__(self, store: JSONStore):
        self.store = store
        self.lock = key_lock(CLIENTS_KEY)

    def get_clients(self) -> list[Client]:
        return decode_clients(self.store.read(CLIENTS_KEY))

    def save_clients(self, clients: list[Client], description: str) -> None:
        self.store.write(CLIENTS_KEY, [client.to_json() for client in clients], description)

    @staticmethod
    def find(clients: list[Client], client_id: str) -> Optional[Client]:
        return next((client for client in clients if client.id == client_id), None)
