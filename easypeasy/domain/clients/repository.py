"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def batch_soft_delete_clients(db: Session, client_ids: list[int]) -> int:
        """Move the given clients to the trash. Returns the number affected."""
        deleted_count = 0

        for client_id in client_ids:
            client = (
                db.query(Client)
                .filter(Client.id == client_id, Client.is_deleted.is_(False))
                .first()
            )
            if client:
                client.is_deleted = True
                deleted_count += 1

        db.commit()
        return deleted_count

    # Search and Filter Methods
    @staticmethod
    def search_clients(
        db: Session,
        client_type: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
    ) -> list[Client]:
        """Search and filter clients"""
        query = db.query(Client)

        if not include_deleted:
            query = query.filter(Client.is_deleted.is_(False))

        if client_type:
            query = query.filter(Client.client_type == client_type)

        if status and status != "all":
            query = query.filter(Client.status == status)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Client.first_name.ilike(search_term))
                | (Client.last_name.ilike(search_term))
                | (Client.company_name.ilike(search_term))
                | (Client.email.ilike(search_term))
            )

        return query.order_by(Client.created_at.desc(), Client.id.desc()).all()
