"""Supplier repository - Database operations for suppliers and venues"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Lab, Supplier, Venue


class SupplierRepository:
    """Repository for supplier and venue database operations"""

    @staticmethod
    def get_suppliers(
        db: Session, include_deleted: bool = False, search: Optional[str] = None
    ) -> list[Supplier]:
        """Get suppliers with their venues, optionally filtered"""
        query = db.query(Supplier).options(joinedload(Supplier.venues))

        if not include_deleted:
            query = query.filter(Supplier.is_deleted.is_(False))

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Supplier.company_name.ilike(search_term))
                | (Supplier.email.ilike(search_term))
                | (Supplier.city.ilike(search_term))
            )

        return query.order_by(Supplier.company_name).all()

    @staticmethod
    def get_supplier_by_id(db: Session, supplier_id: int) -> Optional[Supplier]:
        return db.query(Supplier).filter(Supplier.id == supplier_id).first()

    @staticmethod
    def create_supplier(db: Session, **supplier_data) -> Supplier:
        supplier = Supplier(**supplier_data)
        db.add(supplier)
        db.commit()
        db.refresh(supplier)
        return supplier

    @staticmethod
    def update_supplier(db: Session, supplier: Supplier, **updates) -> Supplier:
        """Update a supplier with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(supplier, key):
                setattr(supplier, key, value)

        db.commit()
        db.refresh(supplier)
        return supplier

    # Venue Methods
    @staticmethod
    def get_all_venues(db: Session) -> list[Venue]:
        """Venues of every active supplier"""
        return (
            db.query(Venue)
            .join(Supplier)
            .filter(Supplier.is_deleted.is_(False))
            .order_by(Venue.name)
            .all()
        )

    @staticmethod
    def get_venue(db: Session, supplier_id: int, venue_id: int) -> Optional[Venue]:
        return (
            db.query(Venue)
            .filter(Venue.id == venue_id, Venue.supplier_id == supplier_id)
            .first()
        )

    @staticmethod
    def count_venue_labs(db: Session, venue_id: int) -> int:
        return db.query(func.count(Lab.id)).filter(Lab.venue_id == venue_id).scalar() or 0

    @staticmethod
    def create_venue(db: Session, supplier: Supplier, **venue_data) -> Venue:
        venue = Venue(supplier_id=supplier.id, **venue_data)
        db.add(venue)
        db.commit()
        db.refresh(venue)
        return venue

    @staticmethod
    def update_venue(db: Session, venue: Venue, **updates) -> Venue:
        for key, value in updates.items():
            if value is not None and hasattr(venue, key):
                setattr(venue, key, value)

        db.commit()
        db.refresh(venue)
        return venue

    @staticmethod
    def delete_venue(db: Session, venue: Venue) -> None:
        db.delete(venue)
        db.commit()
