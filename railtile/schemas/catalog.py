"""Schema for static tile catalog files."""

from pydantic import BaseModel, Field, field_validator

from .base import TileColor


class CatalogFile(BaseModel):
    """Per-color tables of tile name to tile code."""

    name: str = Field(default="default", description="Catalog name")
    version: int = 1
    tiles: dict[TileColor, dict[str, str]] = Field(default_factory=dict)

    @field_validator("tiles", mode="before")
    @classmethod
    def stringify_names(cls, v):
        # YAML reads tile names like 57 as ints and empty codes as None
        if not isinstance(v, dict):
            return v
        return {
            color: (
                {str(name): code or "" for name, code in table.items()}
                if isinstance(table, dict)
                else table or {}
            )
            for color, table in v.items()
        }

    @field_validator("tiles")
    @classmethod
    def validate_unique_names(
        cls, v: dict[TileColor, dict[str, str]]
    ) -> dict[TileColor, dict[str, str]]:
        seen: dict[str, TileColor] = {}
        for color, table in v.items():
            for name in table:
                if name in seen:
                    raise ValueError(
                        f"Tile '{name}' listed under both {seen[name].value} and {color.value}"
                    )
                seen[name] = color
        return v
