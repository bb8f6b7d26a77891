"""
Tests for the dataset inspection helpers.
"""
import pytest
import pandas as pd

from config.settings import HEIGHT_ID_COL, HEIGHT_LABEL_COL, HEIGHT_RANGE_LABELS
from analysis.dataset_analysis import (
    dataset_overview,
    missing_value_report,
    duplicate_report,
    height_range_distribution,
    neighbourhood_counts,
    numeric_summary,
    analyze_dataset,
)


def test_dataset_overview(trees_df):
    overview = dataset_overview(trees_df, n_head=3)
    assert overview['shape'] == (12, 6)
    assert len(overview['head']) == 3
    assert overview['dtypes'][HEIGHT_ID_COL] == 'int64'
    assert overview['memory_mb'] > 0


class TestMissingValues:

    def test_no_missing(self, trees_df):
        assert missing_value_report(trees_df).empty

    def test_sorted_by_percent(self, trees_df):
        trees_df.loc[0:5, 'GENUS_NAME'] = None
        trees_df.loc[0, 'DIAMETER'] = None

        report = missing_value_report(trees_df)
        assert list(report.index) == ['GENUS_NAME', 'DIAMETER']
        assert report.loc['GENUS_NAME', 'Missing'] == 6
        assert report.loc['GENUS_NAME', 'Percent'] == 50.0


def test_duplicate_report(trees_df):
    assert duplicate_report(trees_df) == {'duplicate_rows': 0, 'duplicate_ids': 0}

    changed = trees_df.iloc[[0]].assign(HEIGHT_RANGE_ID=9)
    doubled = pd.concat([trees_df, trees_df.iloc[[1]], changed], ignore_index=True)
    assert duplicate_report(doubled) == {'duplicate_rows': 1, 'duplicate_ids': 2}


def test_duplicate_report_without_id_column(trees_df):
    assert duplicate_report(trees_df, id_col='OBJECTID') == {'duplicate_rows': 0}


class TestHeightDistribution:

    def test_counts_and_percent(self, trees_df):
        dist = height_range_distribution(trees_df).set_index(HEIGHT_ID_COL)
        assert dist['tree_count'].sum() == 12
        assert dist.loc[1, 'tree_count'] == 4
        assert dist.loc[1, 'percent'] == pytest.approx(33.33)
        assert dist.loc[1, 'label'] == HEIGHT_RANGE_LABELS[1]

    def test_uses_canonical_labels_when_mapping_broken(self, trees_df):
        trees_df.loc[0, HEIGHT_LABEL_COL] = 'twenty-ish'
        dist = height_range_distribution(trees_df).set_index(HEIGHT_ID_COL)
        assert dist.loc[2, 'label'] == HEIGHT_RANGE_LABELS[2]

    def test_ignores_missing_heights(self, trees_df):
        trees_df[HEIGHT_ID_COL] = trees_df[HEIGHT_ID_COL].astype(float)
        trees_df.loc[0, HEIGHT_ID_COL] = None
        assert height_range_distribution(trees_df)['tree_count'].sum() == 11


def test_neighbourhood_counts(trees_df):
    counts = neighbourhood_counts(trees_df)
    assert counts['KITSILANO'] == 5
    assert counts.index[0] == 'KITSILANO'


def test_numeric_summary_skips_tree_id(trees_df):
    summary = numeric_summary(trees_df)
    assert 'TREE_ID' not in summary.columns
    assert 'DIAMETER' in summary.columns
    assert summary.loc['count', HEIGHT_ID_COL] == 12


def test_analyze_dataset(trees_csv, capsys):
    results = analyze_dataset(trees_csv)
    assert len(results['data']) == 12
    assert results['height_one_to_one'] is True
    assert results['duplicates']['duplicate_rows'] == 0
    assert 'Analysis complete' in capsys.readouterr().out
