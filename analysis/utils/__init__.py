"""
Utility modules for the Vancouver Street Trees EDA
"""

from .data_loader import (
    load_street_trees,
    load_neighbourhood_boundaries,
    get_data_summary
)

from .visualizations import (
    save_figure,
    plot_height_range_distribution,
    plot_neighbourhood_counts,
    plot_mean_height_by_neighbourhood,
    plot_height_heatmap
)

from .map_utils import (
    plot_choropleth,
    create_choropleth_map
)

from .interactive import (
    create_neighbourhood_bar_chart,
    create_height_heatmap
)

__all__ = [
    'load_street_trees',
    'load_neighbourhood_boundaries',
    'get_data_summary',
    'save_figure',
    'plot_height_range_distribution',
    'plot_neighbourhood_counts',
    'plot_mean_height_by_neighbourhood',
    'plot_height_heatmap',
    'plot_choropleth',
    'create_choropleth_map',
    'create_neighbourhood_bar_chart',
    'create_height_heatmap'
]
