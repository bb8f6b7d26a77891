#!/usr/bin/env python3
"""
Generate All Report Figures

Renders the bar charts, heatmap, choropleth maps and interactive HTML
charts used in the EDA write-up.

Usage:
    python -m analysis.reports.generate_all_figures

    # Or with specific figure groups only:
    python -m analysis.reports.generate_all_figures --figures bars heatmap
"""

import sys
import time
import argparse
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd
import geopandas as gpd

from config.paths import DEFAULT_TREES_FILE, DEFAULT_BOUNDARY_FILE, FIGURES, MAPS
from config.settings import COUNT_CMAP, DENSITY_CMAP, HEIGHT_CMAP, BOUNDARY_NAME_COL
from analysis.utils import (
    load_street_trees,
    load_neighbourhood_boundaries,
    save_figure,
    plot_height_range_distribution,
    plot_neighbourhood_counts,
    plot_mean_height_by_neighbourhood,
    plot_height_heatmap,
    plot_choropleth,
    create_choropleth_map,
    create_neighbourhood_bar_chart,
    create_height_heatmap
)
from data_engineering.datasets.build_neighbourhood_dataset import (
    summarize_by_neighbourhood,
    height_range_crosstab,
    join_boundaries
)

FIGURE_GROUPS = ['bars', 'heatmap', 'choropleth', 'interactive']


def render_figures(trees: pd.DataFrame, summary: pd.DataFrame, crosstab: pd.DataFrame,
                   neighbourhoods: Optional[gpd.GeoDataFrame] = None,
                   figures_dir: Path = FIGURES, maps_dir: Path = MAPS,
                   groups: Iterable[str] = FIGURE_GROUPS) -> Dict[str, Path]:
    """
    Render the selected figure groups

    Args:
        trees: Tree table
        summary: Neighbourhood summary
        crosstab: Neighbourhood x height range counts
        neighbourhoods: Boundary polygons joined with the summary (maps are
            skipped when None)
        figures_dir: Directory for PNG figures
        maps_dir: Directory for interactive HTML outputs
        groups: Figure groups to render

    Returns:
        Mapping of figure name to written file
    """
    groups = set(groups)
    figures_dir = Path(figures_dir)
    maps_dir = Path(maps_dir)
    written = {}

    # Neighbourhood figures need at least one named tree with a height
    has_neighbourhoods = not (summary.empty or crosstab.empty)
    if not has_neighbourhoods:
        print('  ⚠️  No neighbourhood data - skipping neighbourhood charts, heatmaps and maps')

    if 'bars' in groups:
        written['height_distribution'] = save_figure(
            plot_height_range_distribution(trees), figures_dir / 'height_range_distribution.png')
        if has_neighbourhoods:
            written['neighbourhood_counts'] = save_figure(
                plot_neighbourhood_counts(summary), figures_dir / 'trees_per_neighbourhood.png')
            written['mean_height'] = save_figure(
                plot_mean_height_by_neighbourhood(summary), figures_dir / 'mean_height_by_neighbourhood.png')
        print(f'  ✓ Bar charts saved to {figures_dir}')

    if 'heatmap' in groups and has_neighbourhoods:
        written['height_heatmap'] = save_figure(
            plot_height_heatmap(crosstab, normalize=True), figures_dir / 'height_heatmap.png')
        print(f'  ✓ Heatmap saved to {figures_dir}')

    if 'choropleth' in groups:
        if neighbourhoods is None:
            print('  ⚠️  No boundaries loaded - skipping choropleth maps')
        elif has_neighbourhoods:
            written['choropleth_height'] = save_figure(
                plot_choropleth(neighbourhoods, 'mean_height_range_id', cmap=HEIGHT_CMAP),
                figures_dir / 'choropleth_mean_height.png')
            written['choropleth_count'] = save_figure(
                plot_choropleth(neighbourhoods, 'tree_count', cmap=COUNT_CMAP),
                figures_dir / 'choropleth_tree_count.png')
            written['choropleth_density'] = save_figure(
                plot_choropleth(neighbourhoods, 'trees_per_km2', cmap=DENSITY_CMAP),
                figures_dir / 'choropleth_density.png')
            print(f'  ✓ Choropleth maps saved to {figures_dir}')

    if 'interactive' in groups and has_neighbourhoods:
        maps_dir.mkdir(parents=True, exist_ok=True)

        path = maps_dir / 'trees_per_neighbourhood.html'
        create_neighbourhood_bar_chart(summary).write_html(str(path), include_plotlyjs='cdn')
        written['interactive_counts'] = path

        path = maps_dir / 'height_heatmap.html'
        create_height_heatmap(crosstab).write_html(str(path), include_plotlyjs='cdn')
        written['interactive_heatmap'] = path

        if neighbourhoods is not None:
            path = maps_dir / 'mean_height_map.html'
            create_choropleth_map(neighbourhoods, 'mean_height_range_id').save(str(path))
            written['interactive_map'] = path

        print(f'  ✓ Interactive outputs saved to {maps_dir}')

    return written


def main():
    parser = argparse.ArgumentParser(
        description='Generate the figures for the EDA write-up',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate all figures
  python -m analysis.reports.generate_all_figures

  # Static charts only
  python -m analysis.reports.generate_all_figures --figures bars heatmap
        """
    )

    parser.add_argument('--figures', nargs='+', choices=FIGURE_GROUPS, default=FIGURE_GROUPS,
                        help='Figure groups to generate (default: all)')
    parser.add_argument('--trees', type=Path, default=DEFAULT_TREES_FILE,
                        help='Street tree CSV')
    parser.add_argument('--boundaries', type=Path, default=DEFAULT_BOUNDARY_FILE,
                        help='Local area boundary shapefile')
    parser.add_argument('--name-col', default=BOUNDARY_NAME_COL,
                        help='Neighbourhood name column in the shapefile')
    parser.add_argument('--figures-dir', type=Path, default=FIGURES)
    parser.add_argument('--maps-dir', type=Path, default=MAPS)

    args = parser.parse_args()

    print('='*80)
    print('EDA FIGURES GENERATION')
    print('='*80)
    print(f'\nGenerating: {", ".join(args.figures)}')

    start_time = time.time()

    try:
        trees = load_street_trees(args.trees)
        print(f'  ✓ Loaded {len(trees):,} trees')
        summary = summarize_by_neighbourhood(trees)
        crosstab = height_range_crosstab(trees)

        neighbourhoods = None
        if {'choropleth', 'interactive'} & set(args.figures):
            boundaries = load_neighbourhood_boundaries(args.boundaries, name_col=args.name_col)
            neighbourhoods = join_boundaries(boundaries, summary)
            print(f'  ✓ Joined {len(neighbourhoods)} neighbourhood polygons')

        written = render_figures(trees, summary, crosstab, neighbourhoods,
                                 args.figures_dir, args.maps_dir, args.figures)
    except (FileNotFoundError, ValueError) as e:
        print(f'\n❌ {e}')
        return 1

    elapsed = time.time() - start_time

    print('\n' + '='*80)
    print('GENERATION SUMMARY')
    print('='*80)
    for name, path in written.items():
        print(f'  {name:25s} {path}')
    print(f'\nTotal: {len(written)} files in {elapsed:.1f}s')

    return 0


if __name__ == '__main__':
    sys.exit(main())
