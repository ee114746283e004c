"""
Pydantic schemas for kitchen API requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field


class KitchenInput(BaseModel):
    """Request body for POST/PUT /kitchens."""

    name: str = Field(..., min_length=1, max_length=60)


class KitchenSchema(BaseModel):
    """A kitchen."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
