#!/usr/bin/env python3
"""
Build Neighbourhood-Level Dataset

Aggregates street trees by neighbourhood and joins the aggregates onto the
local area boundary polygons for choropleth maps.

Input:
  - Street tree export (data/bronze/vancouver/street_trees/)
  - Local area boundary shapefile (data/bronze/vancouver/local_area_boundary/)

Output:
  - data/silver/vancouver/street_trees_validated.csv
  - data/gold/analytics/vancouver/neighbourhood_summary.csv
  - data/gold/analytics/vancouver/neighbourhood_summary.gpkg

Usage:
  python -m data_engineering.datasets.build_neighbourhood_dataset
  python -m data_engineering.datasets.build_neighbourhood_dataset --trees path/to/street-trees.csv
"""

import re
import sys
import argparse
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, List

import numpy as np
import pandas as pd
import geopandas as gpd
import pandera as pa

from config.paths import (
    DEFAULT_TREES_FILE,
    DEFAULT_BOUNDARY_FILE,
    DEFAULT_VALIDATED_TREES_FILE,
    VANCOUVER_GOLD_ANALYTICS
)
from config.settings import (
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    HEIGHT_RANGE_LABELS,
    TALL_TREE_MIN_HEIGHT_ID,
    BOUNDARY_NAME_COL,
    UTM_10N
)
from analysis.utils.data_loader import load_street_trees, load_neighbourhood_boundaries
from data_engineering.utils.validation import validate_street_trees


# ============================================================================
# JOIN KEY
# ============================================================================

def normalize_neighbourhood_name(name) -> Optional[str]:
    """
    Build the join key for a neighbourhood name

    The tree export uses 'KENSINGTON-CEDAR COTTAGE', the boundary layer
    'Kensington-Cedar Cottage'. Both become 'KENSINGTON-CEDAR COTTAGE'.
    """
    if name is None or pd.isna(name):
        return None
    key = re.sub(r'\s+', ' ', str(name)).strip().upper()
    return key or None


# ============================================================================
# AGGREGATES
# ============================================================================

def summarize_by_neighbourhood(trees: pd.DataFrame) -> pd.DataFrame:
    """
    One row per neighbourhood: tree count and height statistics

    Trees without a neighbourhood name are left out of the aggregate.
    Mean and median are over height range ids, which are ordinal bins.
    """
    df = trees[[NEIGHBOURHOOD_COL, HEIGHT_ID_COL]].copy()
    df['neighbourhood'] = df[NEIGHBOURHOOD_COL].map(normalize_neighbourhood_name)
    df = df.dropna(subset=['neighbourhood'])
    heights = pd.to_numeric(df[HEIGHT_ID_COL], errors='coerce').astype(float)
    df['height'] = heights
    df['is_tall'] = (heights >= TALL_TREE_MIN_HEIGHT_ID).astype(float).where(heights.notna())

    summary = df.groupby('neighbourhood').agg(
        tree_count=('height', 'size'),
        mean_height_range_id=('height', 'mean'),
        median_height_range_id=('height', 'median'),
        tall_tree_share=('is_tall', 'mean')
    ).reset_index()

    summary['tall_tree_share'] = summary['tall_tree_share'].astype(float)

    return summary.sort_values(
        ['tree_count', 'neighbourhood'], ascending=[False, True]
    ).reset_index(drop=True)


def height_range_crosstab(trees: pd.DataFrame, normalize: bool = False) -> pd.DataFrame:
    """
    Neighbourhood x height range table of tree counts

    Columns are height labels ordered by height id. With normalize=True
    each row sums to 1 (share of the neighbourhood's trees per bin).
    """
    df = trees[[NEIGHBOURHOOD_COL, HEIGHT_ID_COL]].copy()
    df['neighbourhood'] = df[NEIGHBOURHOOD_COL].map(normalize_neighbourhood_name)
    df['height'] = pd.to_numeric(df[HEIGHT_ID_COL], errors='coerce')
    df = df.dropna(subset=['neighbourhood', 'height'])
    df['height'] = df['height'].astype(int)

    table = pd.crosstab(df['neighbourhood'], df['height'])
    observed = sorted(table.columns)
    table = table[observed]
    if normalize:
        table = table.div(table.sum(axis=1), axis=0)

    table.columns = [HEIGHT_RANGE_LABELS.get(h, str(h)) for h in observed]
    table.columns.name = 'height_range'
    return table


# ============================================================================
# BOUNDARY JOIN
# ============================================================================

def join_boundaries(boundaries: gpd.GeoDataFrame, summary: pd.DataFrame) -> gpd.GeoDataFrame:
    """
    Attach neighbourhood aggregates to boundary polygons

    Left join from polygons: every neighbourhood is kept. Polygons without
    trees get tree_count 0 and missing height statistics. A neighbourhood
    split over several features is dissolved into one multipolygon first,
    so its trees and area are counted once.
    """
    gdf = boundaries.copy()
    gdf['join_key'] = gdf['neighbourhood'].map(normalize_neighbourhood_name)

    keys = gdf['join_key'].dropna()
    if keys.duplicated().any():
        print(f'  ⚠️  Dissolving split neighbourhoods: {", ".join(sorted(set(keys[keys.duplicated()])))}')
        gdf = gdf.dissolve(by='join_key', as_index=False, dropna=False)

    stats = summary.rename(columns={'neighbourhood': 'join_key'})
    gdf = gdf.merge(stats, on='join_key', how='left')
    gdf['tree_count'] = gdf['tree_count'].fillna(0).astype(int)

    # Areas in metres from UTM 10N
    gdf['area_km2'] = gdf.geometry.to_crs(UTM_10N).area / 1_000_000
    gdf['trees_per_km2'] = np.where(
        gdf['area_km2'] > 0, gdf['tree_count'] / gdf['area_km2'], np.nan
    )

    return gpd.GeoDataFrame(gdf, geometry=boundaries.geometry.name, crs=boundaries.crs)


def unmatched_neighbourhoods(boundaries: gpd.GeoDataFrame, summary: pd.DataFrame) -> Dict[str, List[str]]:
    """Neighbourhood keys that appear on only one side of the join"""
    boundary_keys = set(boundaries['neighbourhood'].map(normalize_neighbourhood_name).dropna())
    tree_keys = set(summary['neighbourhood'].dropna())

    return {
        'only_in_trees': sorted(tree_keys - boundary_keys),
        'only_in_boundaries': sorted(boundary_keys - tree_keys)
    }


# ============================================================================
# BUILD
# ============================================================================

def build_neighbourhood_dataset(trees_path: Path = DEFAULT_TREES_FILE,
                                boundary_path: Path = DEFAULT_BOUNDARY_FILE,
                                output_dir: Path = VANCOUVER_GOLD_ANALYTICS,
                                validated_path: Optional[Path] = DEFAULT_VALIDATED_TREES_FILE,
                                name_col: str = BOUNDARY_NAME_COL) -> gpd.GeoDataFrame:
    """
    Load, validate, aggregate and join; write silver and gold outputs

    Returns:
        Boundary GeoDataFrame with neighbourhood aggregates
    """
    print('='*80)
    print('NEIGHBOURHOOD DATASET BUILDER')
    print('='*80)
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')

    # ------------------------------------------------------------------------
    # 1. Street trees
    # ------------------------------------------------------------------------
    print('\n1. Loading street trees...')
    trees = load_street_trees(trees_path)
    print(f'  ✓ Loaded {len(trees):,} trees from {Path(trees_path).name}')

    trees = validate_street_trees(trees, 'street trees')

    if validated_path is not None:
        validated_path = Path(validated_path)
        validated_path.parent.mkdir(parents=True, exist_ok=True)
        trees.to_csv(validated_path, index=False)
        print(f'  ✓ Saved validated trees: {validated_path}')

    # ------------------------------------------------------------------------
    # 2. Aggregate
    # ------------------------------------------------------------------------
    print('\n2. Aggregating by neighbourhood...')
    summary = summarize_by_neighbourhood(trees)
    print(f'  ✓ {len(summary)} neighbourhoods, {summary["tree_count"].sum():,} trees with a name')

    # ------------------------------------------------------------------------
    # 3. Join boundaries
    # ------------------------------------------------------------------------
    print('\n3. Joining boundary polygons...')
    boundaries = load_neighbourhood_boundaries(boundary_path, name_col=name_col)
    print(f'  ✓ Loaded {len(boundaries)} polygons (CRS: {boundaries.crs})')

    unmatched = unmatched_neighbourhoods(boundaries, summary)
    for side, names in unmatched.items():
        if names:
            print(f'  ⚠️  {side.replace("_", " ")}: {", ".join(names)}')

    gdf = join_boundaries(boundaries, summary)
    matched = gdf['mean_height_range_id'].notna().sum()
    print(f'  ✓ Matched {matched} / {len(gdf)} polygons')

    # ------------------------------------------------------------------------
    # 4. Save
    # ------------------------------------------------------------------------
    print('\n4. Saving gold layer...')
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_path = output_dir / 'neighbourhood_summary.csv'
    gdf.drop(columns='geometry').to_csv(csv_path, index=False)
    print(f'  ✓ Saved: {csv_path}')

    gpkg_path = output_dir / 'neighbourhood_summary.gpkg'
    gdf.to_file(gpkg_path, driver='GPKG')
    print(f'  ✓ Saved: {gpkg_path}')

    return gdf


def main():
    parser = argparse.ArgumentParser(description='Build the neighbourhood-level tree dataset')
    parser.add_argument('--trees', type=Path, default=DEFAULT_TREES_FILE,
                        help='Street tree CSV (default: bronze layer export)')
    parser.add_argument('--boundaries', type=Path, default=DEFAULT_BOUNDARY_FILE,
                        help='Local area boundary shapefile')
    parser.add_argument('--name-col', default=BOUNDARY_NAME_COL,
                        help='Neighbourhood name column in the shapefile')
    parser.add_argument('--output-dir', type=Path, default=VANCOUVER_GOLD_ANALYTICS,
                        help='Directory for the aggregated outputs')

    args = parser.parse_args()

    try:
        build_neighbourhood_dataset(args.trees, args.boundaries, args.output_dir,
                                    name_col=args.name_col)
    except (FileNotFoundError, ValueError, pa.errors.SchemaErrors) as e:
        print(f'\n❌ {e}')
        return 1

    print('\n✅ Neighbourhood dataset complete!')
    return 0


if __name__ == '__main__':
    sys.exit(main())
