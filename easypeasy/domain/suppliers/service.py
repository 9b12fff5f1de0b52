"""Supplier service - Business logic for suppliers and their venues"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Supplier, Venue
from .repository import SupplierRepository
from .schemas import SupplierCreate, SupplierUpdate, VenueCreate, VenueUpdate

logger = logging.getLogger(__name__)


class SupplierService:
    """Service layer for supplier business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SupplierRepository()

    def get_suppliers(self, include_deleted: bool = False, search: Optional[str] = None) -> list[Supplier]:
        return self.repo.get_suppliers(self.db, include_deleted, search)

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self.repo.get_supplier_by_id(self.db, supplier_id)
        if not supplier:
            raise HTTPException(status_code=404, detail="Supplier not found")
        return supplier

    def create_supplier(self, data: SupplierCreate) -> Supplier:
        logger.info(f"📥 Creating supplier {data.companyName}")
        return self.repo.create_supplier(
            self.db,
            company_name=data.companyName,
            vat_number=data.vatNumber,
            email=data.email,
            phone=data.phone,
            address=data.address,
            city=data.city,
            province=data.province,
            zip_code=data.zipCode,
            notes=data.notes,
        )

    def update_supplier(self, supplier_id: int, data: SupplierUpdate) -> Supplier:
        supplier = self.get_supplier(supplier_id)

        updates = {
            "company_name": data.companyName,
            "vat_number": data.vatNumber,
            "email": data.email,
            "phone": data.phone,
            "address": data.address,
            "city": data.city,
            "province": data.province,
            "zip_code": data.zipCode,
            "notes": data.notes,
        }
        return self.repo.update_supplier(self.db, supplier, **updates)

    def delete_supplier(self, supplier_id: int) -> dict:
        """Soft delete: the supplier and its venues stay referenced by past labs"""
        supplier = self.get_supplier(supplier_id)
        self.repo.update_supplier(self.db, supplier, is_deleted=True)
        logger.info(f"🗑️ Supplier {supplier_id} moved to trash")
        return {"message": "Supplier deleted"}

    def restore_supplier(self, supplier_id: int) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        logger.info(f"♻️ Restoring supplier {supplier_id}")
        return self.repo.update_supplier(self.db, supplier, is_deleted=False)

    # Venue Methods
    def get_all_venues(self) -> list[Venue]:
        return self.repo.get_all_venues(self.db)

    def get_venue(self, supplier_id: int, venue_id: int) -> Venue:
        venue = self.repo.get_venue(self.db, supplier_id, venue_id)
        if not venue:
            raise HTTPException(status_code=404, detail="Venue not found")
        return venue

    def create_venue(self, supplier_id: int, data: VenueCreate) -> Venue:
        supplier = self.get_supplier(supplier_id)
        if supplier.is_deleted:
            raise HTTPException(status_code=409, detail="Cannot add venues to a deleted supplier")

        venue = self.repo.create_venue(
            self.db,
            supplier,
            name=data.name,
            address=data.address,
            city=data.city,
            capacity=data.capacity,
            rental_cost=data.rentalCost,
            color=data.color,
            notes=data.notes,
        )
        logger.info(f"✅ Added venue {venue.name} to supplier {supplier_id}")
        return venue

    def update_venue(self, supplier_id: int, venue_id: int, data: VenueUpdate) -> Venue:
        venue = self.get_venue(supplier_id, venue_id)

        updates = {
            "name": data.name,
            "address": data.address,
            "city": data.city,
            "capacity": data.capacity,
            "rental_cost": data.rentalCost,
            "color": data.color,
            "notes": data.notes,
        }
        return self.repo.update_venue(self.db, venue, **updates)

    def delete_venue(self, supplier_id: int, venue_id: int) -> dict:
        venue = self.get_venue(supplier_id, venue_id)

        lab_count = self.repo.count_venue_labs(self.db, venue.id)
        if lab_count:
            raise HTTPException(
                status_code=409,
                detail=f"Venue hosts {lab_count} lab(s) and cannot be deleted",
            )

        self.repo.delete_venue(self.db, venue)
        logger.info(f"🗑️ Deleted venue {venue_id} of supplier {supplier_id}")
        return {"message": "Venue deleted"}
