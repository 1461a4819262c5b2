"""Client service - Business logic for client operations"""

import logging
from typing import Any

from ...shared.constants import ClientFrequency
from ...shared.exceptions import NotFoundError
from ...shared.maps import generate_id
from ...shared.validators import optional_text, require_text, validate_hours
from ...storage.base import JSONStore
from .repository import ClientRepository
from .schemas import Client, ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


def _default_frequency(value: Any) -> ClientFrequency:
    """Unrecognised frequencies fall back to none"""
    try:
        return ClientFrequency(value)
    except ValueError:
        return ClientFrequency.NONE


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, store: JSONStore):
        self.repo = ClientRepository(store)

    def get_clients(self) -> list[Client]:
        return self.repo.get_clients()

    def get_client(self, client_id: str) -> Client:
        client = self.repo.find(self.repo.get_clients(), client_id)
        if client is None:
            raise NotFoundError(f'Client "{client_id}" not found.')
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client with validation"""
        client = Client(
            id=generate_id(),
            name=require_text(data.name, "name"),
            street=require_text(data.street, "street"),
            house_number=require_text(data.house_number, "house_number"),
            notes=optional_text(data.notes),
            expected_hours=validate_hours(data.expected_hours),
            default_frequency=_default_frequency(data.default_frequency),
            default_time_interval=optional_text(data.default_time_interval),
        )

        with self.repo.lock:
            clients = self.repo.get_clients()
            clients.append(client)
            self.repo.save_clients(clients, f"Add client: {client.name}")

        logger.info(f"📥 Created client {client.id} ({client.name})")
        return client

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        """Update the supplied fields of a client"""
        fields = data.model_dump(exclude_unset=True)

        updates = {}
        for field in ("name", "street", "house_number"):
            if field in fields:
                updates[field] = require_text(fields[field], field)
        for field in ("notes", "default_time_interval"):
            if field in fields:
                updates[field] = optional_text(fields[field])
        if "expected_hours" in fields:
            updates["expected_hours"] = validate_hours(fields["expected_hours"])
        if "default_frequency" in fields:
            updates["default_frequency"] = _default_frequency(fields["default_frequency"])

        with self.repo.lock:
            clients = self.repo.get_clients()
            client = self.repo.find(clients, client_id)
            if client is None:
                raise NotFoundError(f'Client "{client_id}" not found.')
            for key, value in updates.items():
                setattr(client, key, value)
            self.repo.save_clients(clients, f"Edit client: {client.name}")

        return client

    def delete_client(self, client_id: str) -> Client:
        """Delete a client; jobs and recurring jobs created from it are untouched"""
        with self.repo.lock:
            clients = self.repo.get_clients()
            client = self.repo.find(clients, client_id)
            if client is None:
                raise NotFoundError(f'Client "{client_id}" not found.')
            clients.remove(client)
            self.repo.save_clients(clients, f"Delete client: {client.name}")

        logger.info(f"🗑️ Deleted client {client_id}")
        return client
