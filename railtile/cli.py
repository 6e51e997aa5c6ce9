"""CLI for inspecting tile catalogs."""

import logging
from typing import Optional

import click

from railtile import config
from railtile.catalog import TileCatalog
from railtile.errors import TileNotFound
from railtile.tile import Tile


def _load_catalog(catalog_path: Optional[str]) -> TileCatalog:
    if catalog_path:
        return TileCatalog.from_yaml(catalog_path)
    return TileCatalog.load_default()


def _describe(tile: Tile) -> list[str]:
    lines = [
        f"Tile {tile.name} ({tile.color.value}), rotation {tile.rotation}",
        f"  Exits: {tile.exits}",
        f"  Cities: {len(tile.cities)}  Towns: {len(tile.towns)}  Offboards: {len(tile.offboards)}",
    ]
    if tile.label is not None:
        lines.append(f"  Label: {tile.label}")
    for path in tile.paths:
        lines.append(f"  Path: {path.a!r} - {path.b!r}")
    if tile.revenue_to_render:
        lines.append(f"  Revenue: {tile.revenue_to_render}")
    if tile.terrain():
        lines.append(f"  Terrain: {', '.join(tile.terrain())}")
    for ct, edge in tile.preferred_city_town_edges.items():
        lines.append(f"  {type(ct).__name__} {ct.index} drawn at edge {edge}")
    if tile.lawson:
        lines.append("  Lawson track")
    return lines


@click.group()
@click.option("--log-level", default=config.LOG_LEVEL, help="Logging level")
def cli(log_level: str):
    """Railway Tile Engine"""
    logging.basicConfig(level=log_level.upper(), format=config.LOG_FORMAT)


@cli.command()
@click.argument("name")
@click.option("--rotation", default=0, type=click.IntRange(0, 5), help="Rotation 0-5")
@click.option("--catalog", "catalog_path", default=None, help="Catalog YAML path")
def show(name: str, rotation: int, catalog_path: Optional[str]):
    """Describe a catalog tile."""
    catalog = _load_catalog(catalog_path)
    try:
        tile = catalog.lookup(name, rotation=rotation)
    except TileNotFound as e:
        raise click.ClickException(str(e))

    for line in _describe(tile):
        click.echo(line)


@cli.command()
@click.argument("name")
@click.option("--catalog", "catalog_path", default=None, help="Catalog YAML path")
def upgrades(name: str, catalog_path: Optional[str]):
    """List catalog tiles a tile can be upgraded to."""
    catalog = _load_catalog(catalog_path)
    try:
        tile = catalog.lookup(name)
    except TileNotFound as e:
        raise click.ClickException(str(e))

    candidates = sorted(catalog.upgrades_for(tile))
    if not candidates:
        click.echo(f"No upgrades for {name}")
        return

    click.echo(f"Upgrades for {name}:")
    for candidate in candidates:
        click.echo(f"  {candidate.name} ({candidate.color.value})")


@cli.command()
@click.option("--catalog", "catalog_path", default=None, help="Catalog YAML path")
def validate(catalog_path: Optional[str]):
    """Decode every tile in a catalog."""
    catalog = _load_catalog(catalog_path)
    errors = catalog.validate()

    for error in errors:
        click.echo(f"  {error}", err=True)

    if errors:
        raise click.ClickException(f"{len(errors)} of {len(catalog)} tiles failed to decode")

    click.echo(f"All {len(catalog)} tiles in '{catalog.name}' decoded")


if __name__ == "__main__":
    cli()
