#!/usr/bin/env python3
"""
Data Verification Script

Checks that both input files are present and readable
before running the pipeline.

Usage:
    python scripts/verify_data.py
    python scripts/verify_data.py --trees path/to/street-trees.csv --boundaries path/to/boundaries.shp
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

import pandas as pd
import geopandas as gpd
from config.paths import DEFAULT_TREES_FILE, DEFAULT_BOUNDARY_FILE, ensure_directories
from config.settings import REQUIRED_COLUMNS, BOUNDARY_NAME_COL
from analysis.utils.data_loader import detect_delimiter


def check_file_exists(file_path, description):
    """Check if a file exists and print status"""
    if file_path.exists():
        size_mb = file_path.stat().st_size / (1024 * 1024)
        print(f'✓ {description}: {size_mb:.1f} MB')
        return True
    else:
        print(f'✗ {description}: NOT FOUND')
        print(f'  Expected: {file_path}')
        return False


def verify_tree_data(trees_file):
    """Verify the street tree export has the required columns"""
    try:
        sep = detect_delimiter(trees_file)
        df = pd.read_csv(trees_file, sep=sep, nrows=100, encoding='utf-8-sig')
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]

        if missing:
            print(f'  ✗ Missing columns: {missing}')
            return False

        with open(trees_file, encoding='utf-8-sig') as f:
            total_rows = sum(1 for _ in f) - 1  # -1 for header
        print(f'  ✓ Delimiter: {sep!r}')
        print(f'  ✓ Contains {total_rows:,} trees')
        print(f'  ✓ Required columns present')
        return True
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        print(f'  ✗ Error reading file: {e}')
        return False


def verify_boundary_data(boundary_file, name_col=BOUNDARY_NAME_COL):
    """Verify the boundary shapefile has polygons and a name column"""
    try:
        gdf = gpd.read_file(boundary_file)

        if name_col not in gdf.columns:
            print(f'  ✗ Missing name column: {name_col!r}')
            return False

        geom_types = set(gdf.geometry.geom_type.dropna())
        if not geom_types <= {'Polygon', 'MultiPolygon'}:
            print(f'  ⚠️  Unexpected geometry types: {sorted(geom_types)}')

        print(f'  ✓ Contains {len(gdf):,} neighbourhoods')
        print(f'  ✓ Geometry type: {", ".join(sorted(geom_types))}')
        print(f'  ✓ CRS: {gdf.crs}')
        return True
    except Exception as e:
        print(f'  ✗ Error reading file: {e}')
        return False


def main():
    """Main verification function"""
    parser = argparse.ArgumentParser(description='Verify the EDA input files')
    parser.add_argument('--trees', type=Path, default=DEFAULT_TREES_FILE)
    parser.add_argument('--boundaries', type=Path, default=DEFAULT_BOUNDARY_FILE)
    parser.add_argument('--name-col', default=BOUNDARY_NAME_COL)
    args = parser.parse_args()

    print('=' * 80)
    print('DATA VERIFICATION')
    print('=' * 80)

    print('\n1. Checking directory structure...')
    ensure_directories()
    print('  ✓ Directory structure initialized')

    print('\n2. Checking required data files...')
    print()

    all_ok = True

    print('Street Trees (Bronze Layer):')
    if check_file_exists(args.trees, 'Street tree export'):
        if not verify_tree_data(args.trees):
            all_ok = False
    else:
        all_ok = False

    print()

    print('Neighbourhood Boundaries (Bronze Layer):')
    if check_file_exists(args.boundaries, 'Local area boundary'):
        if not verify_boundary_data(args.boundaries, args.name_col):
            all_ok = False
    else:
        all_ok = False

    print()
    print('=' * 80)

    if all_ok:
        print('✓ ALL CHECKS PASSED')
        print()
        print('Next steps:')
        print('  1. Run pipeline: python scripts/run_pipeline.py')
        print('  2. Or just the report: python -m analysis.reports.eda_report')
        return 0
    else:
        print('✗ VERIFICATION FAILED')
        print()
        print('Please fix the issues above before running the pipeline.')
        return 1


if __name__ == '__main__':
    sys.exit(main())
