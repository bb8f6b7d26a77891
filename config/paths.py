"""
Project Path Configuration

Centralized path definitions for data and outputs
Using Medallion Architecture: Bronze (raw) → Silver (validated) → Gold (aggregated)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Silver / Gold)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw, immutable data (as exported by the City of Vancouver)
BRONZE = DATA_ROOT / "bronze"
BRONZE_VANCOUVER = BRONZE / "vancouver"

# Silver Layer: Validated tree records
SILVER = DATA_ROOT / "silver"
SILVER_VANCOUVER = SILVER / "vancouver"

# Gold Layer: Neighbourhood-level aggregates for plotting
GOLD = DATA_ROOT / "gold"
GOLD_ANALYTICS = GOLD / "analytics"
VANCOUVER_GOLD_ANALYTICS = GOLD_ANALYTICS / "vancouver"

# ==============================================================================
# VANCOUVER DATA PATHS (Bronze Layer)
# ==============================================================================

VANCOUVER_BRONZE_TREES = BRONZE_VANCOUVER / "street_trees"
VANCOUVER_BRONZE_BOUNDARIES = BRONZE_VANCOUVER / "local_area_boundary"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

DEFAULT_TREES_FILE = VANCOUVER_BRONZE_TREES / "street-trees.csv"
DEFAULT_BOUNDARY_FILE = VANCOUVER_BRONZE_BOUNDARIES / "local-area-boundary.shp"

DEFAULT_VALIDATED_TREES_FILE = SILVER_VANCOUVER / "street_trees_validated.csv"
DEFAULT_SUMMARY_CSV = VANCOUVER_GOLD_ANALYTICS / "neighbourhood_summary.csv"
DEFAULT_SUMMARY_GPKG = VANCOUVER_GOLD_ANALYTICS / "neighbourhood_summary.gpkg"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
FIGURES = OUTPUTS_ROOT / "figures"
MAPS = OUTPUTS_ROOT / "maps"
REPORTS = OUTPUTS_ROOT / "reports"

# ==============================================================================
# DIRECTORY INITIALIZATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist"""

    bronze_dirs = [
        BRONZE, BRONZE_VANCOUVER,
        VANCOUVER_BRONZE_TREES, VANCOUVER_BRONZE_BOUNDARIES
    ]

    silver_dirs = [SILVER, SILVER_VANCOUVER]

    gold_dirs = [GOLD, GOLD_ANALYTICS, VANCOUVER_GOLD_ANALYTICS]

    output_dirs = [OUTPUTS_ROOT, FIGURES, MAPS, REPORTS]

    all_dirs = bronze_dirs + silver_dirs + gold_dirs + output_dirs
    for directory in all_dirs:
        directory.mkdir(parents=True, exist_ok=True)


# ==============================================================================
# ARCHITECTURE DOCUMENTATION
# ==============================================================================

ARCHITECTURE_DOCS = """
MEDALLION DATA ARCHITECTURE
===========================

Bronze Layer (data/bronze/vancouver/):
  - Street tree export (semicolon-delimited CSV)
  - Local area boundary shapefile (22 neighbourhoods)
  - Never modified after export

Silver Layer (data/silver/vancouver/):
  - Tree records that passed schema validation
  - Neighbourhood names stripped, types coerced

Gold Layer (data/gold/analytics/vancouver/):
  - One row per neighbourhood: tree count, mean height range id, density
  - Joined to boundary polygons for choropleth maps
"""

def print_architecture():
    """Print architecture documentation"""
    print(ARCHITECTURE_DOCS)
