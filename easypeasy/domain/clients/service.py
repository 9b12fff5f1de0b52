"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(
        self,
        client_type: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
    ) -> list[Client]:
        """Get clients, excluding the trash unless asked"""
        return self.repo.search_clients(self.db, client_type, status, search, include_deleted)

    def get_client(self, client_id: int) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new parent or institutional client"""
        logger.info(f"📥 Creating {data.clientType} client")

        client_data = {
            "client_type": data.clientType,
            "first_name": data.firstName,
            "last_name": data.lastName,
            "tax_code": data.taxCode,
            "company_name": data.companyName,
            "vat_number": data.vatNumber,
            "number_of_children": data.numberOfChildren,
            "age_range": data.ageRange,
            "email": data.email,
            "phone": data.phone,
            "address": data.address,
            "city": data.city,
            "province": data.province,
            "zip_code": data.zipCode,
            "status": data.status,
            "notes": data.notes,
        }

        return self.repo.create_client(self.db, **client_data)

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        """Update a client"""
        client = self.get_client(client_id)

        updates = {
            "first_name": data.firstName,
            "last_name": data.lastName,
            "tax_code": data.taxCode,
            "company_name": data.companyName,
            "vat_number": data.vatNumber,
            "number_of_children": data.numberOfChildren,
            "age_range": data.ageRange,
            "email": data.email,
            "phone": data.phone,
            "address": data.address,
            "city": data.city,
            "province": data.province,
            "zip_code": data.zipCode,
            "status": data.status,
            "notes": data.notes,
        }

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> dict:
        """Move a client to the trash"""
        client = self.get_client(client_id)
        self.repo.update_client(self.db, client, is_deleted=True)
        logger.info(f"🗑️ Client {client_id} moved to trash")
        return {"message": "Client deleted"}

    def restore_client(self, client_id: int) -> Client:
        client = self.get_client(client_id)
        return self.repo.update_client(self.db, client, is_deleted=False)

    def batch_delete_clients(self, client_ids: list[int]) -> dict:
        """Batch delete multiple clients"""
        if not client_ids:
            raise HTTPException(status_code=400, detail="No client IDs provided")

        deleted_count = self.repo.batch_soft_delete_clients(self.db, client_ids)
        logger.info(f"✅ Deleted {deleted_count} client(s)")

        return {
            "message": f"Successfully deleted {deleted_count} client(s)",
            "deletedCount": deleted_count,
        }
