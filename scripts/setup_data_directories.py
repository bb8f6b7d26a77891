#!/usr/bin/env python3
"""
Data Directory Setup Script

Creates the Medallion Architecture directory structure for the
Vancouver Street Trees EDA.

Run this BEFORE placing the data exports or running the pipeline.

Usage:
    python scripts/setup_data_directories.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config.paths import (
    ensure_directories,
    DATA_ROOT,
    BRONZE_VANCOUVER,
    SILVER_VANCOUVER,
    VANCOUVER_GOLD_ANALYTICS,
    DEFAULT_TREES_FILE,
    DEFAULT_BOUNDARY_FILE,
    OUTPUTS_ROOT
)


def print_tree(directory, prefix='', is_last=True):
    """Print directory tree structure"""
    connector = '└── ' if is_last else '├── '
    print(f'{prefix}{connector}{directory.name}/')

    try:
        subdirs = sorted([d for d in directory.iterdir() if d.is_dir()])
    except PermissionError:
        return

    for i, subdir in enumerate(subdirs):
        is_last_subdir = (i == len(subdirs) - 1)
        extension = '    ' if is_last else '│   '
        print_tree(subdir, prefix + extension, is_last_subdir)


def create_readme_files():
    """Create README files in key directories to explain their purpose"""

    bronze_readme = BRONZE_VANCOUVER / 'README.md'
    if not bronze_readme.exists():
        bronze_readme.write_text(f"""# Bronze Layer - Raw Vancouver Data

This directory contains **raw, immutable exports** from the City of Vancouver
open data portal.

## Expected files

- `street_trees/{DEFAULT_TREES_FILE.name}` - street tree inventory
  (semicolon-delimited; TREE_ID, NEIGHBOURHOOD_NAME, HEIGHT_RANGE_ID, HEIGHT_RANGE, ...)
- `local_area_boundary/{DEFAULT_BOUNDARY_FILE.name}` - local area boundary
  shapefile with its .shx, .dbf and .prj siblings

## Important

- Files in this layer should **never be modified** after export
""")

    silver_readme = SILVER_VANCOUVER / 'README.md'
    if not silver_readme.exists():
        silver_readme.write_text("""# Silver Layer - Validated Tree Records

`street_trees_validated.csv` is the tree table after schema validation
(types coerced, neighbourhood names stripped). Missing values and
duplicates are reported by the validation step, not removed.
""")

    gold_readme = VANCOUVER_GOLD_ANALYTICS / 'README.md'
    if not gold_readme.exists():
        gold_readme.write_text("""# Gold Layer - Neighbourhood Aggregates

One row per neighbourhood polygon:

- `tree_count`, `mean_height_range_id`, `median_height_range_id`, `tall_tree_share`
- `area_km2`, `trees_per_km2`

`neighbourhood_summary.gpkg` carries the polygons for choropleth maps,
`neighbourhood_summary.csv` the same table without geometry.
""")

    print(f'\n✓ Created README files in Bronze, Silver, and Gold layers')


def main():
    """Main setup function"""
    print('=' * 80)
    print('VANCOUVER STREET TREES EDA - DATA DIRECTORY SETUP')
    print('=' * 80)

    print('\nCreating Medallion Architecture directory structure...\n')

    ensure_directories()

    print('Directory structure created:')
    print()
    print_tree(DATA_ROOT)

    create_readme_files()

    print('\n' + '=' * 80)
    print('✓ SETUP COMPLETE')
    print('=' * 80)

    print('\nNext steps:')
    print(f'  1. Place the tree export at:   {DEFAULT_TREES_FILE}')
    print(f'  2. Place the boundaries at:    {DEFAULT_BOUNDARY_FILE}')
    print('  3. Verify data: python scripts/verify_data.py')
    print('  4. Run pipeline: python scripts/run_pipeline.py')

    print('\nDirectory locations:')
    print(f'  Bronze (raw):        {BRONZE_VANCOUVER}')
    print(f'  Silver (validated):  {SILVER_VANCOUVER}')
    print(f'  Gold (aggregated):   {VANCOUVER_GOLD_ANALYTICS}')
    print(f'  Outputs:             {OUTPUTS_ROOT}')

    print()


if __name__ == '__main__':
    main()
