"""Barbershop and Barber data models for barbersched."""

from pydantic import BaseModel, Field


class Barbershop(BaseModel):
    """A tenant owning barbers, holidays and appointments."""

    id: str = Field(..., description="Unique barbershop identifier")
    name: str = Field(..., description="Barbershop name")


class Barber(BaseModel):
    """A staff member providing services at one barbershop."""

    id: str = Field(..., description="Unique barber identifier")
    barbershop_id: str = Field(..., description="Barbershop the barber works at")
    display_name: str = Field(..., description="Name shown to customers and staff")
