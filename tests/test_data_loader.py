"""
Tests for the street tree and boundary loaders.
"""
import pytest
import pandas as pd
import geopandas as gpd

from config.settings import NEIGHBOURHOOD_COL, WGS84
from analysis.utils.data_loader import (
    detect_delimiter,
    load_street_trees,
    load_neighbourhood_boundaries,
    get_data_summary,
)


class TestDetectDelimiter:
    """Tests for delimiter detection from the header line."""

    def test_semicolon_export(self, trees_csv):
        assert detect_delimiter(trees_csv) == ';'

    def test_comma_resave(self, tmp_path, trees_df):
        path = tmp_path / 'trees.csv'
        trees_df.to_csv(path, index=False)
        assert detect_delimiter(path) == ','

    def test_single_column_falls_back_to_default(self, tmp_path):
        path = tmp_path / 'one.csv'
        path.write_text('TREE_ID\n1\n2\n')
        assert detect_delimiter(path) == ';'


class TestLoadStreetTrees:
    """Tests for load_street_trees."""

    def test_loads_all_rows(self, trees_csv, trees_df):
        trees = load_street_trees(trees_csv)
        assert len(trees) == len(trees_df)
        assert list(trees.columns) == list(trees_df.columns)

    def test_explicit_separator(self, tmp_path, trees_df):
        path = tmp_path / 'trees.csv'
        trees_df.to_csv(path, index=False)
        trees = load_street_trees(path, sep=',')
        assert len(trees) == len(trees_df)

    def test_sample_size(self, trees_csv):
        assert len(load_street_trees(trees_csv, sample_size=4)) == 4

    def test_usecols_keeps_required_columns(self, trees_csv):
        trees = load_street_trees(trees_csv, usecols=['GENUS_NAME'])
        assert 'GENUS_NAME' in trees.columns
        assert 'HEIGHT_RANGE_ID' in trees.columns
        assert 'DIAMETER' not in trees.columns

    def test_strips_neighbourhood_names(self, tmp_path, trees_df):
        trees_df[NEIGHBOURHOOD_COL] = '  ' + trees_df[NEIGHBOURHOOD_COL] + ' '
        path = tmp_path / 'padded.csv'
        trees_df.to_csv(path, sep=';', index=False)

        trees = load_street_trees(path)
        assert set(trees[NEIGHBOURHOOD_COL]) == {'KITSILANO', 'ARBUTUS-RIDGE', 'DOWNTOWN'}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match='Street tree file not found'):
            load_street_trees(tmp_path / 'nope.csv')

    def test_missing_required_column(self, tmp_path, trees_df):
        path = tmp_path / 'no_height.csv'
        trees_df.drop(columns=['HEIGHT_RANGE_ID']).to_csv(path, sep=';', index=False)
        with pytest.raises(ValueError, match='HEIGHT_RANGE_ID'):
            load_street_trees(path)


class TestLoadBoundaries:
    """Tests for load_neighbourhood_boundaries."""

    def test_renames_name_column(self, boundary_shp):
        gdf = load_neighbourhood_boundaries(boundary_shp)
        assert 'neighbourhood' in gdf.columns
        assert 'Stanley Park' in set(gdf['neighbourhood'])

    def test_reprojects_to_wgs84(self, tmp_path, boundaries_gdf):
        path = tmp_path / 'utm.shp'
        boundaries_gdf.to_crs('EPSG:26910').to_file(path)

        gdf = load_neighbourhood_boundaries(path)
        assert gdf.crs == WGS84
        assert gdf.total_bounds[0] == pytest.approx(-123.1, abs=0.5)

    def test_custom_name_column(self, boundary_shp):
        gdf = load_neighbourhood_boundaries(boundary_shp, name_col='mapid')
        assert set(gdf['neighbourhood']) == {'KITS', 'ARB', 'CBD', 'SP'}

    def test_missing_name_column(self, boundary_shp):
        with pytest.raises(ValueError, match='not found'):
            load_neighbourhood_boundaries(boundary_shp, name_col='LOCAL_AREA')

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_neighbourhood_boundaries(tmp_path / 'missing.shp')


def test_get_data_summary(trees_df):
    summary = get_data_summary(trees_df)
    assert summary['records'] == 12
    assert summary['neighbourhoods'] == 3
    assert summary['height_id_min'] == 0
    assert summary['height_id_max'] == 5


def test_get_data_summary_empty_heights(trees_df):
    trees_df['HEIGHT_RANGE_ID'] = pd.NA
    summary = get_data_summary(trees_df)
    assert summary['height_id_min'] is None


def test_boundaries_without_crs_are_assumed_wgs84(tmp_path, boundaries_gdf):
    no_crs = gpd.GeoDataFrame(boundaries_gdf.drop(columns='geometry'),
                              geometry=list(boundaries_gdf.geometry))
    assert no_crs.crs is None
    path = tmp_path / 'no-crs.shp'
    no_crs.to_file(path)

    gdf = load_neighbourhood_boundaries(path)
    assert gdf.crs == WGS84
    assert gdf.total_bounds == pytest.approx(boundaries_gdf.total_bounds)
