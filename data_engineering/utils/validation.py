#!/usr/bin/env python3
"""
Data Quality and Schema Validation

Uses pandera to validate the street tree table for:
- Schema compliance (correct data types, height range bounds)
- Height range consistency (one label per id, one id per label)
- Data quality checks (missing values, duplicate tree ids)

Missing values and duplicates are reported, not dropped.

Usage:
    from data_engineering.utils.validation import validate_street_trees

    trees = validate_street_trees(trees, 'street trees')
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd

from config.settings import (
    TREE_ID_COL,
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    HEIGHT_LABEL_COL,
    HEIGHT_RANGE_MIN,
    HEIGHT_RANGE_MAX
)


# ============================================================================
# STREET TREE SCHEMA
# ============================================================================

street_tree_schema = pa.DataFrameSchema(
    {
        TREE_ID_COL: Column(
            'Int64',
            Check.greater_than_or_equal_to(0),
            nullable=True,
            description='City-assigned tree identifier'
        ),
        NEIGHBOURHOOD_COL: Column(
            pd.StringDtype(),
            nullable=True,
            description='Local area name, upper case in the export'
        ),
        HEIGHT_ID_COL: Column(
            'Int64',
            Check.in_range(HEIGHT_RANGE_MIN, HEIGHT_RANGE_MAX),
            nullable=True,
            description='Binned height: 0 = 0-10 ft ... 10 = over 100 ft'
        ),
        HEIGHT_LABEL_COL: Column(
            pd.StringDtype(),
            nullable=True,
            description="Human readable height bin, e.g. 10' - 20'"
        ),
    },
    strict=False,  # Allow extra columns not defined here
    coerce=True,
    description='Vancouver street tree schema'
)


# ============================================================================
# HEIGHT RANGE CONSISTENCY
# ============================================================================

def check_height_range_mapping(df: pd.DataFrame) -> pd.DataFrame:
    """
    Tabulate height range id/label pairs

    Returns:
        One row per observed (id, label) pair with the number of trees and
        how many distinct labels the id has and ids the label has
    """
    pairs = (
        df[[HEIGHT_ID_COL, HEIGHT_LABEL_COL]]
        .dropna()
        .groupby([HEIGHT_ID_COL, HEIGHT_LABEL_COL])
        .size()
        .reset_index(name='tree_count')
    )

    pairs['n_labels_per_id'] = pairs.groupby(HEIGHT_ID_COL)[HEIGHT_LABEL_COL].transform('nunique')
    pairs['n_ids_per_label'] = pairs.groupby(HEIGHT_LABEL_COL)[HEIGHT_ID_COL].transform('nunique')

    return pairs.sort_values(HEIGHT_ID_COL).reset_index(drop=True)


def height_range_is_one_to_one(df: pd.DataFrame) -> bool:
    """True if every height id has exactly one label and vice versa"""
    pairs = check_height_range_mapping(df)
    if pairs.empty:
        return True
    return bool((pairs['n_labels_per_id'] == 1).all() and (pairs['n_ids_per_label'] == 1).all())


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_street_trees(df: pd.DataFrame, name: str = 'street trees',
                          strict_mapping: bool = False) -> pd.DataFrame:
    """
    Validate the street tree table

    Args:
        df: DataFrame to validate
        name: Dataset name for console output
        strict_mapping: Raise if the height id/label mapping is not one-to-one

    Returns:
        Validated DataFrame with coerced column types

    Raises:
        pandera.errors.SchemaErrors: If schema validation fails
        ValueError: If strict_mapping is set and the mapping is broken
    """
    print(f'\n{"="*70}')
    print(f'Validating {name}')
    print(f'{"="*70}')

    # Validate schema
    try:
        validated = street_tree_schema.validate(df, lazy=True)
        print(f'  ✓ Schema validation passed')
    except pa.errors.SchemaErrors as err:
        print(f'  ❌ Schema validation failed for {name}:')
        print(err.failure_cases)
        raise

    # Height range id <-> label
    if height_range_is_one_to_one(validated):
        print(f'  ✓ Height range ids and labels correspond one-to-one')
    else:
        pairs = check_height_range_mapping(validated)
        broken = pairs[(pairs['n_labels_per_id'] > 1) | (pairs['n_ids_per_label'] > 1)]
        message = f'Height range ids and labels are not one-to-one in {name}'
        if strict_mapping:
            raise ValueError(f'❌ {message}:\n{broken.to_string(index=False)}')
        print(f'  ⚠️  {message}:')
        print(broken.to_string(index=False))

    # Additional quality checks
    check_data_quality(validated, name)

    print(f'  ✓ All validations passed for {name}\n')
    return validated


def check_data_quality(df: pd.DataFrame, name: str):
    """
    Perform data quality checks beyond schema validation

    Checks:
    - Missing value percentages
    - Duplicate rows
    - Duplicate tree ids
    """
    if len(df) == 0:
        print(f'  ⚠️  {name} is empty')
        return

    # Missing values
    missing = df.isnull().sum()
    missing = missing[missing > 0]
    if len(missing) > 0:
        print(f'  ⚠️  Missing values:')
        for col, count in missing.sort_values(ascending=False).items():
            print(f'     - {col}: {count:,} ({count / len(df) * 100:.1f}%)')
    else:
        print(f'  ✓ No missing values')

    # Duplicates
    dup_rows = df.duplicated().sum()
    if dup_rows > 0:
        print(f'  ⚠️  WARNING: {dup_rows:,} duplicate rows found')

    if TREE_ID_COL in df.columns:
        dup_ids = df[TREE_ID_COL].dropna().duplicated().sum()
        if dup_ids > 0:
            print(f'  ⚠️  WARNING: {dup_ids:,} duplicate {TREE_ID_COL} values found')
        else:
            print(f'  ✓ No duplicate {TREE_ID_COL} values')
