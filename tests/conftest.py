"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- A small street tree table (three neighbourhoods)
- Square neighbourhood polygons, one of them without trees
- The same data written to a temporary CSV and shapefile
"""
import pytest
import pandas as pd
import geopandas as gpd
from shapely.geometry import box

from config.settings import HEIGHT_RANGE_LABELS, UTM_10N, WGS84


# ============================================================
# Sample Data Fixtures
# ============================================================

TREE_HEIGHTS = {
    'KITSILANO': [2, 3, 4, 3, 5],
    'ARBUTUS-RIDGE': [0, 1, 1, 2],
    'DOWNTOWN': [1, 1, 2],
}


@pytest.fixture
def trees_df() -> pd.DataFrame:
    """12 trees across three neighbourhoods, no missing values or duplicates."""
    rows = []
    tree_id = 1
    for neighbourhood, heights in TREE_HEIGHTS.items():
        for height in heights:
            rows.append({
                'TREE_ID': tree_id,
                'NEIGHBOURHOOD_NAME': neighbourhood,
                'HEIGHT_RANGE_ID': height,
                'HEIGHT_RANGE': HEIGHT_RANGE_LABELS[height],
                'GENUS_NAME': 'ACER' if tree_id % 2 else 'PRUNUS',
                'DIAMETER': 4.0 + tree_id,
            })
            tree_id += 1
    return pd.DataFrame(rows)


@pytest.fixture
def boundaries_gdf() -> gpd.GeoDataFrame:
    """Four 1 km x 1 km squares; Stanley Park has no trees."""
    names = ['Kitsilano', 'Arbutus-Ridge', 'Downtown', 'Stanley Park']
    x0, y0 = 488000, 5455000
    squares = [box(x0 + i * 1000, y0, x0 + (i + 1) * 1000, y0 + 1000) for i in range(len(names))]
    gdf = gpd.GeoDataFrame({'name': names, 'mapid': ['KITS', 'ARB', 'CBD', 'SP']},
                           geometry=squares, crs=UTM_10N)
    return gdf.to_crs(WGS84)


@pytest.fixture
def trees_csv(tmp_path, trees_df):
    """Tree table as a semicolon-delimited export."""
    path = tmp_path / 'street-trees.csv'
    trees_df.to_csv(path, sep=';', index=False)
    return path


@pytest.fixture
def boundary_shp(tmp_path, boundaries_gdf):
    """Boundary polygons as a shapefile."""
    path = tmp_path / 'local-area-boundary.shp'
    boundaries_gdf.to_file(path)
    return path


@pytest.fixture
def split_boundaries_gdf(boundaries_gdf) -> gpd.GeoDataFrame:
    """Boundaries with Kitsilano split over two 1 km x 1 km features."""
    x0, y0 = 493000, 5455000
    extra = gpd.GeoDataFrame({'name': ['Kitsilano'], 'mapid': ['KITS']},
                             geometry=[box(x0, y0, x0 + 1000, y0 + 1000)], crs=UTM_10N)
    combined = pd.concat([boundaries_gdf, extra.to_crs(WGS84)], ignore_index=True)
    return gpd.GeoDataFrame(combined, geometry='geometry', crs=WGS84)


@pytest.fixture
def invalid_trees_csv(tmp_path, trees_df):
    """Tree export with a height range id outside 0..10."""
    trees_df.loc[0, 'HEIGHT_RANGE_ID'] = 42
    path = tmp_path / 'invalid-trees.csv'
    trees_df.to_csv(path, sep=';', index=False)
    return path
