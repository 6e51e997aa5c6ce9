"""Configuration for the railtile engine."""

import os
from pathlib import Path

# Paths
RAILTILE_ROOT = Path(__file__).parent
CATALOG_DIR = RAILTILE_ROOT / "catalog" / "data"

# Catalog
DEFAULT_CATALOG_PATH = Path(
    os.environ.get("RAILTILE_CATALOG", CATALOG_DIR / "tiles.yaml")
)

# Logging (only applied by the CLI entry point)
LOG_LEVEL = os.environ.get("RAILTILE_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Edge placement weights
PLACEMENT_EDGE_WEIGHT = 1.0
PLACEMENT_NEIGHBOR_WEIGHT = 0.1  # spill onto the two adjacent edges
PLACEMENT_LOCATION_NAME_BIAS = 0.1  # keeps edge 0 free for the location name
