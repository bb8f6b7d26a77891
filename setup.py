#!/usr/bin/env python3
"""
Setup script for the Vancouver Street Trees EDA project

Install in development mode:
    pip install -e .

This allows importing from anywhere:
    from config.paths import DEFAULT_TREES_FILE
    from data_engineering.utils.validation import validate_street_trees
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
with open(requirements_file) as f:
    # Filter out duplicates and empty lines
    requirements = []
    seen = set()
    for line in f:
        line = line.strip()
        if line and not line.startswith('#'):
            # Extract package name (before ==, >=, etc.)
            pkg_name = line.split('==')[0].split('>=')[0].split('<=')[0].split('<')[0].split('>')[0].strip()
            if pkg_name not in seen:
                requirements.append(line)
                seen.add(pkg_name)

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
with open(readme_file, encoding='utf-8') as f:
    long_description = f.read()

setup(
    name="vancouver-street-trees-eda",
    version="1.0.0",
    description="Exploratory data analysis of the Vancouver street tree inventory",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=['tests', 'tests.*', 'scripts', 'notebooks', 'docs']),
    python_requires='>=3.10',
    install_requires=requirements,
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
        ],
        'dev': [
            'pytest>=7.0.0',
            'pytest-cov>=4.0.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.0.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'trees-eda=analysis.dataset_analysis:main',
            'trees-build=data_engineering.datasets.build_neighbourhood_dataset:main',
            'trees-report=analysis.reports.eda_report:main',
            'trees-figures=analysis.reports.generate_all_figures:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: GIS',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
