"""Repository for barbershop capacity configuration."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from barbersched.models.capacity import CapacityConfig
from barbersched.database.models import CapacityConfigDB

logger = logging.getLogger(__name__)


class CapacityRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, barbershop_id: str) -> CapacityConfig:
        """Stored configuration, or an unset one (default capacity) if none is stored."""
        row = self.db.query(CapacityConfigDB).filter(CapacityConfigDB.barbershop_id == barbershop_id).first()
        if row is None:
            return CapacityConfig(barbershop_id=barbershop_id)
        return row.to_pydantic()

    def upsert(self, barbershop_id: str, base_capacity: Optional[int]) -> CapacityConfig:
        try:
            row = self.db.query(CapacityConfigDB).filter(CapacityConfigDB.barbershop_id == barbershop_id).first()
            if row is None:
                row = CapacityConfigDB(barbershop_id=barbershop_id, base_capacity=base_capacity)
                self.db.add(row)
            else:
                row.base_capacity = base_capacity
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Capacity for barbershop {barbershop_id} set to {base_capacity}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to set capacity for barbershop {barbershop_id}: {type(e).__name__}: {str(e)}")
            raise
