"""Client router - FastAPI endpoints for client operations"""

from fastapi import APIRouter, Depends, status

from ...storage import JSONStore, get_store
from .schemas import ClientCreate, ClientUpdate
from .service import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(store: JSONStore = Depends(get_store)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(store)


@router.get("")
def get_clients(service: ClientService = Depends(get_client_service)):
    """Get all saved clients"""
    return [client.to_json() for client in service.get_clients()]


@router.get("/{client_id}")
def get_client(client_id: str, service: ClientService = Depends(get_client_service)):
    return service.get_client(client_id).to_json()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    """Create a new client"""
    client = service.create_client(data)
    return {"message": "Client added successfully", "client": client.to_json()}


@router.patch("/{client_id}")
def update_client(
    client_id: str,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Update a client"""
    client = service.update_client(client_id, data)
    return {"message": "Client updated successfully", "client": client.to_json()}


@router.delete("/{client_id}")
def delete_client(client_id: str, service: ClientService = Depends(get_client_service)):
    """Delete a client"""
    client = service.delete_client(client_id)
    return {"message": "Client deleted successfully", "client": client.to_json()}
