"""Tile construction options."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TileOptions(BaseModel):
    """Options accepted when building a tile from a code."""

    model_config = ConfigDict(extra="forbid")

    rotation: int = Field(default=0, ge=0, le=5, description="Rotation 0-5")
    preprinted: bool = Field(default=False, description="Printed on the map rather than laid")
    index: int = Field(default=0, ge=0, description="Disambiguates tiles sharing a name")
    location_name: Optional[str] = Field(default=None, description="Map location name")
    reservation_blocks: bool = Field(
        default=False,
        description="Reservations block every non-reserving entity",
    )
