#!/usr/bin/env python3
"""
EDA Report: Vancouver Street Trees

Runs the whole exploratory analysis in reading order and writes it up as a
Markdown post with the figures embedded:

1. Objective
2. Loading the data
3. Inspecting structure
4. Checking for missing and duplicate values
5. Visualising (bar charts, heatmap, choropleth maps)
6. Conclusions
7. Limitations

Outputs: outputs/reports/
  - eda_report.md
  - eda_snapshot.json (numbers behind the report, for re-run comparison)
  - figures/*.png
  - maps/*.html

Usage:
    python -m analysis.reports.eda_report
    python -m analysis.reports.eda_report --trees street-trees.csv --boundaries local-area-boundary.shp
"""

import os
import sys
import argparse
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional

import pandera as pa

from config.paths import DEFAULT_TREES_FILE, DEFAULT_BOUNDARY_FILE, REPORTS
from config.settings import (
    TREE_ID_COL,
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    HEIGHT_LABEL_COL,
    BOUNDARY_NAME_COL,
    COLUMN_RENAME,
    REPORT_TITLE,
    REPORT_FILENAME,
    SNAPSHOT_FILENAME
)
from analysis.utils import load_street_trees, load_neighbourhood_boundaries
from analysis.dataset_analysis import (
    dataset_overview,
    missing_value_report,
    duplicate_report,
    height_range_distribution
)
from analysis.findings import draw_conclusions, limitations
from analysis.reproducibility import (
    summary_snapshot,
    snapshot_digest,
    compare_snapshots,
    write_snapshot,
    load_snapshot
)
from analysis.reports.generate_all_figures import render_figures, FIGURE_GROUPS
from data_engineering.utils.validation import validate_street_trees, height_range_is_one_to_one
from data_engineering.datasets.build_neighbourhood_dataset import (
    summarize_by_neighbourhood,
    height_range_crosstab,
    join_boundaries,
    unmatched_neighbourhoods
)


def _code_block(text: str) -> str:
    return f'```\n{text}\n```'


def _image(caption: str, path: Optional[str]) -> str:
    if path is None:
        return f'*({caption}: not generated)*'
    return f'![{caption}]({path})'


def render_report(context: Dict[str, Any]) -> str:
    """
    Render the EDA post as Markdown

    Args:
        context: Results collected by generate_report. Figure paths in
            context['figures'] must already be relative to the report

    Returns:
        Markdown text
    """
    overview = context['overview']
    missing = context['missing']
    duplicates = context['duplicates']
    heights = context['height_distribution']
    summary = context['summary']
    figures = context.get('figures', {})
    n_rows, n_cols = overview['shape']

    lines = [
        f"# {context.get('title', REPORT_TITLE)}",
        '',
        f"*Generated {context.get('generated', datetime.now().strftime('%Y-%m-%d %H:%M'))}*",
        '',
        '## 1. Objective',
        '',
        'Exploratory Data Analysis (EDA) is the first look at a dataset: what it contains, '
        'whether it can be trusted, and which patterns are worth a closer look. '
        'The running example is the City of Vancouver street tree inventory. '
        'The question is simple: **how do street tree counts and heights vary across '
        'neighbourhoods?**',
        '',
        '## 2. Loading the data',
        '',
        f"The tree inventory is read from `{context['trees_file']}` and the neighbourhood "
        f"boundaries from `{context.get('boundary_file') or 'n/a'}`.",
        '',
        f"The table has **{n_rows:,} trees** and **{n_cols} columns**, "
        f"using {overview['memory_mb']:.1f} MB in memory. The columns used here are "
        f"`{TREE_ID_COL}`, `{NEIGHBOURHOOD_COL}`, `{HEIGHT_ID_COL}` and `{HEIGHT_LABEL_COL}`.",
        '',
        '## 3. Inspecting structure',
        '',
        'The first rows and the column types:',
        '',
        _code_block(overview['head'].to_string(index=False)),
        '',
        _code_block('\n'.join(f'{col:25s} {dtype}' for col, dtype in overview['dtypes'].items())),
        '',
        f"`{HEIGHT_ID_COL}` is a code for a 10 ft height bin and `{HEIGHT_LABEL_COL}` is its label. "
        + ('Every id has exactly one label and every label one id, so either column can be used.'
           if context['height_one_to_one'] else
           '**The id and label do not correspond one-to-one in this export**, so the id is used throughout.'),
        '',
        _code_block(heights.to_string(index=False)),
        '',
        '## 4. Missing and duplicate values',
        '',
    ]

    if len(missing) == 0:
        lines.append('There are no missing values in any column.')
    else:
        lines.append('Columns with missing values:')
        lines.append('')
        lines.append(_code_block(missing.to_string()))
    lines.append('')

    dup_ids = duplicates.get('duplicate_ids', 0)
    if duplicates['duplicate_rows'] == 0 and dup_ids == 0:
        lines.append(f'There are no duplicate rows and no duplicate `{TREE_ID_COL}` values.')
    else:
        lines.append(
            f"There are {duplicates['duplicate_rows']:,} duplicate rows and "
            f"{dup_ids:,} duplicate `{TREE_ID_COL}` values. They are kept and noted below."
        )
    lines += [
        '',
        '## 5. Visualising',
        '',
        '### Height ranges',
        '',
        _image('Trees by height range', figures.get('height_distribution')),
        '',
        '### Trees per neighbourhood',
        '',
        _image('Trees per neighbourhood', figures.get('neighbourhood_counts')),
        '',
        '### Mean height range by neighbourhood',
        '',
        _image('Mean height range id by neighbourhood', figures.get('mean_height')),
        '',
        '### Heatmap: neighbourhood x height range',
        '',
        'Each row shows how a neighbourhood\'s trees are spread across height ranges.',
        '',
        _image('Height range heatmap', figures.get('height_heatmap')),
        '',
        '### Choropleth maps',
        '',
        _image('Mean height range id', figures.get('choropleth_height')),
        '',
        _image('Tree count', figures.get('choropleth_count')),
        '',
        _image('Trees per km²', figures.get('choropleth_density')),
        '',
    ]

    if figures.get('interactive_map'):
        lines += [f"An interactive version is in [{figures['interactive_map']}]({figures['interactive_map']}).", '']

    table = summary.rename(columns=COLUMN_RENAME).round(2)
    lines += [
        'The numbers behind the maps:',
        '',
        _code_block(table.to_string(index=False)),
        '',
        '## 6. Conclusions',
        '',
    ]

    for finding in context['findings']:
        lines.append(f'- **{finding.title}.** {finding.statement}')
        if finding.caveat:
            lines.append(f'  *{finding.caveat}*')
    lines += ['', '## 7. Limitations', '']
    for note in context['limitations']:
        lines.append(f'- {note}')

    lines += ['', '---', '', f"Snapshot digest: `{context.get('digest', 'n/a')}`", '']

    return '\n'.join(lines)


def _relative(path: Path, start: Path) -> str:
    return Path(os.path.relpath(path, start)).as_posix()


def generate_report(trees_path: Path = DEFAULT_TREES_FILE,
                    boundary_path: Optional[Path] = DEFAULT_BOUNDARY_FILE,
                    output_dir: Path = REPORTS,
                    name_col: str = BOUNDARY_NAME_COL) -> Path:
    """
    Run every step of the EDA and write the Markdown report

    Args:
        trees_path: Street tree CSV
        boundary_path: Boundary shapefile (None to skip maps)
        output_dir: Directory for the report, figures and snapshot
        name_col: Neighbourhood name column in the shapefile

    Returns:
        Path to the written report
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print('='*80)
    print('EDA REPORT: VANCOUVER STREET TREES')
    print('='*80)

    # Load
    print('\nLoading data...')
    trees = load_street_trees(trees_path)
    print(f'  ✓ Loaded {len(trees):,} trees')

    # Inspect (on the raw table)
    overview = dataset_overview(trees)
    missing = missing_value_report(trees)
    duplicates = duplicate_report(trees)

    trees = validate_street_trees(trees, 'street trees')
    heights = height_range_distribution(trees)

    # Aggregate
    print('Aggregating...')
    summary = summarize_by_neighbourhood(trees)
    crosstab = height_range_crosstab(trees)
    print(f'  ✓ {len(summary)} neighbourhoods')

    neighbourhoods = None
    unmatched = None
    if boundary_path is not None:
        boundaries = load_neighbourhood_boundaries(boundary_path, name_col=name_col)
        unmatched = unmatched_neighbourhoods(boundaries, summary)
        neighbourhoods = join_boundaries(boundaries, summary)
        print(f'  ✓ Joined {len(neighbourhoods)} boundary polygons')

        density = neighbourhoods[['join_key', 'area_km2', 'trees_per_km2']].dropna(
            subset=['join_key']).rename(columns={'join_key': 'neighbourhood'})
        summary = summary.merge(density, on='neighbourhood', how='left')

    # Figures
    print('\nRendering figures...')
    written = render_figures(trees, summary, crosstab, neighbourhoods,
                             output_dir / 'figures', output_dir / 'maps', FIGURE_GROUPS)

    # Conclusions
    findings = draw_conclusions(summary, trees)
    notes = limitations(trees, unmatched)

    # Reproducibility
    snapshot = summary_snapshot(trees, summary)
    digest = snapshot_digest(snapshot)
    snapshot_path = output_dir / SNAPSHOT_FILENAME
    if snapshot_path.exists():
        differences = compare_snapshots(load_snapshot(snapshot_path), snapshot)
        if differences:
            print(f'  ⚠️  {len(differences)} differences from the previous run:')
            for line in differences[:20]:
                print(f'     - {line}')
        else:
            print('  ✓ Summary numbers match the previous run')
    write_snapshot(snapshot, snapshot_path)

    context = {
        'title': REPORT_TITLE,
        'generated': datetime.now().strftime('%Y-%m-%d %H:%M'),
        'trees_file': Path(trees_path).name,
        'boundary_file': Path(boundary_path).name if boundary_path is not None else None,
        'overview': overview,
        'missing': missing,
        'duplicates': duplicates,
        'height_distribution': heights,
        'height_one_to_one': height_range_is_one_to_one(trees),
        'summary': summary,
        'figures': {name: _relative(path, output_dir) for name, path in written.items()},
        'findings': findings,
        'limitations': notes,
        'digest': digest
    }

    report_path = output_dir / REPORT_FILENAME
    report_path.write_text(render_report(context), encoding='utf-8')
    print(f'\n  ✓ Saved: {report_path}')

    return report_path


def main():
    parser = argparse.ArgumentParser(description='Write the street tree EDA report')
    parser.add_argument('--trees', type=Path, default=DEFAULT_TREES_FILE,
                        help='Street tree CSV')
    parser.add_argument('--boundaries', type=Path, default=DEFAULT_BOUNDARY_FILE,
                        help='Local area boundary shapefile')
    parser.add_argument('--no-maps', action='store_true',
                        help='Skip the boundary join and choropleth maps')
    parser.add_argument('--name-col', default=BOUNDARY_NAME_COL,
                        help='Neighbourhood name column in the shapefile')
    parser.add_argument('--output-dir', type=Path, default=REPORTS)

    args = parser.parse_args()
    boundary_path = None if args.no_maps else args.boundaries

    try:
        generate_report(args.trees, boundary_path, args.output_dir, args.name_col)
    except (FileNotFoundError, ValueError, pa.errors.SchemaErrors) as e:
        print(f'\n❌ {e}')
        return 1

    print('\n✅ Report complete!')
    return 0


if __name__ == '__main__':
    sys.exit(main())
