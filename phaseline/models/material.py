"""
Material model definitions.

Materials are only used to group tasks into sub-timelines; quantities are
carried through untouched.
"""

from pydantic import BaseModel, Field


class MaterialItem(BaseModel):
    """Material line from the project's material list."""

    item: str = Field(..., description="Material name, e.g. 'Laminate Flooring'")
    quantity: float = Field(0, description="Quantity")
    unit: str = Field("", description="Unit of measure")
