"""Capacity configuration model for barbersched."""

from typing import Optional
from pydantic import BaseModel, Field

from barbersched.models.constants import DEFAULT_BASE_CAPACITY


class CapacityConfig(BaseModel):
    """Barbershop-wide concurrent appointment capacity."""

    barbershop_id: str = Field(..., description="Barbershop this configuration belongs to")
    base_capacity: Optional[int] = Field(None, ge=0, description="Concurrent appointments per slot")

    @property
    def effective_capacity(self) -> int:
        """Configured capacity, or the default when unset or zero."""
        return self.base_capacity or DEFAULT_BASE_CAPACITY
