"""
Data loading utilities for the Vancouver Street Trees EDA
Loads the street tree export and the local area boundary shapefile
"""

import pandas as pd
import geopandas as gpd
from pathlib import Path
from typing import Optional, Dict, Any, List

from config.paths import DEFAULT_TREES_FILE, DEFAULT_BOUNDARY_FILE
from config.settings import (
    REQUIRED_COLUMNS,
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    CANDIDATE_DELIMITERS,
    DEFAULT_DELIMITER,
    BOUNDARY_NAME_COL,
    WGS84
)


def detect_delimiter(file_path: Path) -> str:
    """
    Guess the delimiter from the header line

    The City's export uses ';' but re-saved copies are often ','.
    """
    with open(file_path, 'r', encoding='utf-8-sig') as f:
        header = f.readline()

    counts = {sep: header.count(sep) for sep in CANDIDATE_DELIMITERS}
    best = max(counts, key=counts.get)
    if counts[best] == 0:
        return DEFAULT_DELIMITER
    return best


def load_street_trees(file_path: Path = DEFAULT_TREES_FILE, sep: Optional[str] = None,
                      usecols: Optional[List[str]] = None,
                      sample_size: Optional[int] = None) -> pd.DataFrame:
    """
    Load the street tree export

    Args:
        file_path: Path to the delimited tree file
        sep: Delimiter. If None, detected from the header line
        usecols: Columns to keep (required columns are always kept)
        sample_size: Number of rows to read (None for all data)

    Returns:
        DataFrame with one row per tree

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(
            f"Street tree file not found: {file_path}\n"
            f"Export it from the City of Vancouver open data portal and place it there, "
            f"or pass --trees."
        )

    if sep is None:
        sep = detect_delimiter(file_path)

    if usecols is not None:
        wanted = list(dict.fromkeys(REQUIRED_COLUMNS + list(usecols)))
        usecols = lambda col: col in wanted

    df = pd.read_csv(
        file_path,
        sep=sep,
        usecols=usecols,
        nrows=sample_size,
        encoding='utf-8-sig',
        low_memory=False
    )
    df.columns = [c.strip() for c in df.columns]

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(
            f"Missing required columns in {file_path.name}: {missing}\n"
            f"Found columns: {list(df.columns)}"
        )

    # Names come padded in some exports
    df[NEIGHBOURHOOD_COL] = df[NEIGHBOURHOOD_COL].astype('string').str.strip()

    return df


def load_neighbourhood_boundaries(file_path: Path = DEFAULT_BOUNDARY_FILE,
                                  name_col: str = BOUNDARY_NAME_COL) -> gpd.GeoDataFrame:
    """
    Load neighbourhood boundary polygons

    Args:
        file_path: Path to the boundary shapefile
        name_col: Column holding the neighbourhood name

    Returns:
        GeoDataFrame in WGS84 with a 'neighbourhood' column

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the name column is missing
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(
            f"Boundary file not found: {file_path}\n"
            f"Place the local area boundary shapefile (.shp/.shx/.dbf/.prj) there, "
            f"or pass --boundaries."
        )

    gdf = gpd.read_file(file_path)

    if name_col not in gdf.columns:
        raise ValueError(
            f"Name column '{name_col}' not found in {file_path.name}. "
            f"Available columns: {[c for c in gdf.columns if c != 'geometry']}"
        )

    # Ensure CRS is set to WGS84 (lat/lon)
    if gdf.crs is None:
        gdf = gdf.set_crs(WGS84)
    elif gdf.crs != WGS84:
        gdf = gdf.to_crs(WGS84)

    gdf = gdf.rename(columns={name_col: 'neighbourhood'})
    gdf['neighbourhood'] = gdf['neighbourhood'].astype(str).str.strip()

    return gdf


def get_data_summary(trees: pd.DataFrame) -> Dict[str, Any]:
    """
    Get headline numbers for the tree table

    Returns:
        Dictionary with summary stats
    """
    heights = trees[HEIGHT_ID_COL].dropna()

    return {
        'records': len(trees),
        'columns': trees.shape[1],
        'neighbourhoods': int(trees[NEIGHBOURHOOD_COL].nunique()),
        'height_id_min': int(heights.min()) if len(heights) else None,
        'height_id_max': int(heights.max()) if len(heights) else None,
        'memory_mb': trees.memory_usage(deep=True).sum() / 1024 / 1024
    }
