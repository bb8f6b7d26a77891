"""
Static chart utilities for the Vancouver Street Trees EDA
Bar charts and heatmaps rendered with matplotlib and seaborn
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
from pathlib import Path
from typing import Optional

from config.settings import (
    HEIGHT_ID_COL,
    HEIGHT_RANGE_LABELS,
    FIGURE_DPI,
    FIGURE_SIZE,
    SEABORN_STYLE,
    HEIGHT_CMAP,
    CHART_COLORS
)

sns.set_style(SEABORN_STYLE)


def save_figure(fig: plt.Figure, path: Path, dpi: int = FIGURE_DPI) -> Path:
    """Save a figure as PNG, creating the parent directory, then close it"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_height_range_distribution(trees: pd.DataFrame,
                                   title: str = 'Street Trees by Height Range') -> plt.Figure:
    """
    Bar chart of trees per height range

    Args:
        trees: Tree table with a height range id column
        title: Chart title

    Returns:
        Matplotlib figure
    """
    heights = pd.to_numeric(trees[HEIGHT_ID_COL], errors='coerce').dropna().astype(int)
    counts = heights.value_counts().sort_index()
    labels = [HEIGHT_RANGE_LABELS.get(h, str(h)) for h in counts.index]

    fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    bars = ax.bar(labels, counts.values, color=CHART_COLORS[0], alpha=0.85)

    # Add counts
    for bar, count in zip(bars, counts.values):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), f'{count:,}',
                ha='center', va='bottom', fontsize=9)

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Height Range', fontsize=12)
    ax.set_ylabel('Number of Trees', fontsize=12)
    ax.tick_params(axis='x', rotation=45)
    ax.grid(axis='x', alpha=0)
    fig.tight_layout()

    return fig


def plot_neighbourhood_counts(summary: pd.DataFrame, top_n: Optional[int] = None,
                              title: str = 'Street Trees per Neighbourhood') -> plt.Figure:
    """
    Horizontal bar chart of tree counts per neighbourhood

    Args:
        summary: Neighbourhood summary (neighbourhood, tree_count)
        top_n: Show only the N neighbourhoods with most trees
        title: Chart title

    Returns:
        Matplotlib figure
    """
    data = summary.sort_values('tree_count', ascending=False)
    if top_n is not None:
        data = data.head(top_n)
    # Largest on top
    data = data.iloc[::-1]

    fig, ax = plt.subplots(figsize=(12, max(4, 0.4 * len(data))))
    ax.barh(data['neighbourhood'].str.title(), data['tree_count'], color=CHART_COLORS[1], alpha=0.85)

    offset = data['tree_count'].max() * 0.01 if len(data) else 0
    for i, count in enumerate(data['tree_count']):
        ax.text(count + offset, i, f'{int(count):,}', va='center', fontsize=9)

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Number of Trees', fontsize=12)
    ax.set_ylabel('Neighbourhood', fontsize=12)
    ax.grid(axis='y', alpha=0)
    fig.tight_layout()

    return fig


def plot_mean_height_by_neighbourhood(summary: pd.DataFrame,
                                      title: str = 'Mean Height Range ID by Neighbourhood') -> plt.Figure:
    """
    Horizontal bar chart of the mean height range id per neighbourhood

    A dashed line marks the tree-weighted city mean.
    """
    data = summary.dropna(subset=['mean_height_range_id'])
    data = data.sort_values('mean_height_range_id', ascending=True)

    fig, ax = plt.subplots(figsize=(12, max(4, 0.4 * len(data))))
    ax.barh(data['neighbourhood'].str.title(), data['mean_height_range_id'],
            color=CHART_COLORS[0], alpha=0.85)

    if len(data) > 0:
        city_mean = (data['mean_height_range_id'] * data['tree_count']).sum() / data['tree_count'].sum()
        ax.axvline(city_mean, color=CHART_COLORS[3], linestyle='--', linewidth=2,
                   label=f'City mean ({city_mean:.2f})')
        ax.legend(loc='lower right', framealpha=0.9)

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Mean Height Range ID (0 = under 10 ft)', fontsize=12)
    ax.set_ylabel('Neighbourhood', fontsize=12)
    fig.tight_layout()

    return fig


def plot_height_heatmap(crosstab: pd.DataFrame, normalize: bool = True,
                        title: Optional[str] = None) -> plt.Figure:
    """
    Heatmap of neighbourhood x height range

    Args:
        crosstab: Output of height_range_crosstab (counts)
        normalize: Colour by row share instead of raw counts
        title: Chart title

    Returns:
        Matplotlib figure
    """
    table = crosstab
    if normalize:
        table = crosstab.div(crosstab.sum(axis=1), axis=0).fillna(0)
    if title is None:
        title = ('Share of Each Neighbourhood\'s Trees by Height Range' if normalize
                 else 'Trees by Neighbourhood and Height Range')

    if normalize:
        fmt = '.0%'
    elif all(pd.api.types.is_integer_dtype(t) for t in table.dtypes):
        fmt = ',d'
    else:
        fmt = '.2f'

    table = table.copy()
    table.index = [str(name).title() for name in table.index]

    fig, ax = plt.subplots(figsize=(14, max(6, 0.45 * len(table))))
    sns.heatmap(
        table,
        ax=ax,
        cmap=HEIGHT_CMAP,
        annot=True,
        fmt=fmt,
        annot_kws={'size': 8},
        linewidths=0.5,
        cbar_kws={'label': 'Share of trees' if normalize else 'Number of trees'}
    )

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Height Range', fontsize=12)
    ax.set_ylabel('Neighbourhood', fontsize=12)
    fig.tight_layout()

    return fig
