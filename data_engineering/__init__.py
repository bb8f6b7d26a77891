"""
Data Engineering Module for the Vancouver Street Trees EDA

This module contains the data preparation code organized by pipeline stage:
1. utils/ - Schema validation and data quality checks
2. datasets/ - Neighbourhood-level aggregates joined to boundary polygons

Usage:
    from data_engineering.utils.validation import validate_street_trees
    from data_engineering.datasets.build_neighbourhood_dataset import summarize_by_neighbourhood
"""

__version__ = "1.0.0"
