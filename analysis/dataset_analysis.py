#!/usr/bin/env python3
"""
Dataset Analysis - Structure and Quality Inspection

Inspects the street tree table before any plotting:
- Shape, columns, dtypes and memory
- Missing value analysis
- Duplicate records and tree ids
- Height range distribution
- Trees per neighbourhood
- Numeric summary statistics

Usage:
  python -m analysis.dataset_analysis
  python -m analysis.dataset_analysis --trees data/bronze/vancouver/street_trees/street-trees.csv
"""

import sys
import argparse
from pathlib import Path
from typing import Dict, Any

import numpy as np
import pandas as pd

from config.paths import DEFAULT_TREES_FILE
from config.settings import (
    TREE_ID_COL,
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    HEIGHT_LABEL_COL,
    HEIGHT_RANGE_LABELS
)
from analysis.utils.data_loader import load_street_trees
from data_engineering.utils.validation import check_height_range_mapping, height_range_is_one_to_one


def dataset_overview(df: pd.DataFrame, n_head: int = 5) -> Dict[str, Any]:
    """Shape, columns, dtypes, memory and the first rows"""
    return {
        'shape': df.shape,
        'columns': list(df.columns),
        'dtypes': df.dtypes.astype(str).to_dict(),
        'memory_mb': df.memory_usage(deep=True).sum() / 1024 / 1024,
        'head': df.head(n_head)
    }


def missing_value_report(df: pd.DataFrame) -> pd.DataFrame:
    """Columns with missing values, sorted by percent missing"""
    missing = df.isnull().sum()
    missing_pct = (missing / max(len(df), 1) * 100).round(2)
    report = pd.DataFrame({
        'Missing': missing[missing > 0],
        'Percent': missing_pct[missing > 0]
    })
    return report.sort_values('Percent', ascending=False)


def duplicate_report(df: pd.DataFrame, id_col: str = TREE_ID_COL) -> Dict[str, int]:
    """Count duplicated full rows and duplicated ids"""
    report = {'duplicate_rows': int(df.duplicated().sum())}
    if id_col in df.columns:
        report['duplicate_ids'] = int(df[id_col].dropna().duplicated().sum())
    return report


def height_range_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """
    Trees per height range id, with label and percent

    The label is the one observed in the data when the mapping is one-to-one,
    otherwise the canonical label for the id.
    """
    heights = pd.to_numeric(df[HEIGHT_ID_COL], errors='coerce').dropna().astype(int)
    counts = heights.value_counts().sort_index()

    dist = pd.DataFrame({
        HEIGHT_ID_COL: counts.index,
        'tree_count': counts.values
    })

    observed = {}
    if HEIGHT_LABEL_COL in df.columns and height_range_is_one_to_one(df):
        pairs = check_height_range_mapping(df)
        observed = dict(zip(pairs[HEIGHT_ID_COL].astype(int), pairs[HEIGHT_LABEL_COL].astype(str)))

    dist['label'] = [observed.get(h, HEIGHT_RANGE_LABELS.get(h, str(h))) for h in dist[HEIGHT_ID_COL]]
    total = dist['tree_count'].sum()
    dist['percent'] = (dist['tree_count'] / total * 100).round(2) if total else 0.0

    return dist[[HEIGHT_ID_COL, 'label', 'tree_count', 'percent']]


def neighbourhood_counts(df: pd.DataFrame) -> pd.Series:
    """Trees per neighbourhood name as it appears in the export"""
    return df[NEIGHBOURHOOD_COL].value_counts()


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    """describe() of the numeric columns, identifiers excluded"""
    numeric = df.select_dtypes(include=[np.number])
    numeric = numeric.drop(columns=[TREE_ID_COL], errors='ignore')
    if numeric.shape[1] == 0:
        return pd.DataFrame()
    return numeric.describe()


def print_section(title):
    print(f"\n{'='*70}")
    print(title)
    print(f"{'='*70}")


def analyze_dataset(trees_path: Path = DEFAULT_TREES_FILE) -> Dict[str, Any]:
    """Run the full inspection and print it"""
    print(f"\n{'#'*70}")
    print(f"# STREET TREE DATASET ANALYSIS")
    print(f"{'#'*70}")

    print(f"\nLoading {trees_path}...")
    df = load_street_trees(trees_path)
    print(f"✓ Loaded {len(df):,} trees")

    overview = dataset_overview(df)
    print_section('1. STRUCTURE')
    print(f"\nDataset shape: {overview['shape']}")
    print(f"Memory usage:  {overview['memory_mb']:.1f} MB")
    print(f"\nColumns:")
    for col, dtype in overview['dtypes'].items():
        print(f"  {col:25s} {dtype}")
    print(f"\nFirst rows:")
    print(overview['head'].to_string())

    missing = missing_value_report(df)
    print_section('2. MISSING VALUES')
    if len(missing) > 0:
        print(missing.to_string())
    else:
        print("  No missing values!")

    duplicates = duplicate_report(df)
    print_section('3. DUPLICATES')
    print(f"\nDuplicate rows: {duplicates['duplicate_rows']:,}")
    print(f"Duplicate {TREE_ID_COL}: {duplicates.get('duplicate_ids', 0):,}")

    heights = height_range_distribution(df)
    one_to_one = height_range_is_one_to_one(df)
    print_section('4. HEIGHT RANGES')
    print(f"\nLabel/id correspondence one-to-one: {'yes' if one_to_one else 'NO'}")
    print()
    for _, row in heights.iterrows():
        print(f"  {int(row[HEIGHT_ID_COL]):2d}  {row['label']:>10s}: {int(row['tree_count']):8,} ({row['percent']:5.1f}%)")

    counts = neighbourhood_counts(df)
    print_section('5. NEIGHBOURHOODS')
    print(f"\n{len(counts)} neighbourhoods")
    for name, count in counts.items():
        print(f"  {str(name):30s}: {count:7,} ({count / len(df) * 100:5.1f}%)")

    summary = numeric_summary(df)
    print_section('6. NUMERIC SUMMARY')
    if summary.empty:
        print("No numeric features found!")
    else:
        print(summary.round(2).to_string())

    print(f"\n{'='*70}")
    print(f"✓ Analysis complete")
    print(f"{'='*70}\n")

    return {
        'data': df,
        'overview': overview,
        'missing': missing,
        'duplicates': duplicates,
        'height_distribution': heights,
        'height_one_to_one': one_to_one,
        'neighbourhood_counts': counts,
        'numeric_summary': summary
    }


def main():
    parser = argparse.ArgumentParser(description="Inspect the street tree dataset")
    parser.add_argument('--trees', type=Path, default=DEFAULT_TREES_FILE,
                        help='Street tree CSV (default: bronze layer export)')

    args = parser.parse_args()

    try:
        analyze_dataset(args.trees)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
