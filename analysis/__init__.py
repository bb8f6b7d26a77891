"""
Analysis Module

Data exploration, visualization, and reporting

Modules:
- dataset_analysis: structure inspection and quality summaries
- findings: conclusions and limitations drawn from the aggregates
- reproducibility: summary snapshots for re-run comparison
- reports: figure generation and the EDA write-up
- utils: loaders, plotting and mapping utilities
"""

__version__ = "1.0.0"
