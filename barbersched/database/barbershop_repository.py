"""Repository for Barbershop and Barber database operations."""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from barbersched.models.barbershop import Barbershop, Barber
from barbersched.database.models import BarbershopDB, BarberDB

logger = logging.getLogger(__name__)


class BarbershopRepository:
    """Repository for barbershops and their barbers."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, barbershop_id: Optional[str] = None) -> Barbershop:
        row = BarbershopDB(id=barbershop_id or str(uuid.uuid4()), name=name)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created barbershop {row.id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create barbershop: {type(e).__name__}: {str(e)}")
            raise

    def get(self, barbershop_id: str) -> Optional[Barbershop]:
        row = self.db.query(BarbershopDB).filter(BarbershopDB.id == barbershop_id).first()
        return row.to_pydantic() if row else None

    def add_barber(self, barbershop_id: str, display_name: str, barber_id: Optional[str] = None) -> Barber:
        row = BarberDB(id=barber_id or str(uuid.uuid4()), barbershop_id=barbershop_id, display_name=display_name)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Added barber {row.id} to barbershop {barbershop_id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to add barber to barbershop {barbershop_id}: {type(e).__name__}: {str(e)}")
            raise

    def get_barber(self, barber_id: str) -> Optional[Barber]:
        row = self.db.query(BarberDB).filter(BarberDB.id == barber_id).first()
        return row.to_pydantic() if row else None

    def list_barbers(self, barbershop_id: str) -> List[Barber]:
        rows = (
            self.db.query(BarberDB)
            .filter(BarberDB.barbershop_id == barbershop_id)
            .order_by(BarberDB.display_name)
            .all()
        )
        return [row.to_pydantic() for row in rows]
