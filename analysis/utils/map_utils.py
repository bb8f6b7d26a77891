"""
Map visualization utilities for the Vancouver Street Trees EDA
Static choropleths with geopandas and interactive choropleths with folium
"""

import folium
import geopandas as gpd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Optional, Tuple

from config.settings import (
    HEIGHT_CMAP,
    MISSING_COLOR,
    MAP_CENTER,
    MAP_ZOOM,
    MAP_TILES,
    COLUMN_RENAME
)


def plot_choropleth(gdf: gpd.GeoDataFrame, column: str, title: Optional[str] = None,
                    cmap: str = HEIGHT_CMAP, label_polygons: bool = True,
                    legend_label: Optional[str] = None) -> plt.Figure:
    """
    Create a static choropleth of a neighbourhood statistic

    Args:
        gdf: Boundary polygons joined with neighbourhood aggregates
        column: Column to colour by
        title: Chart title (defaults to the column display name)
        cmap: Matplotlib colormap
        label_polygons: Write neighbourhood names inside polygons
        legend_label: Colorbar label

    Returns:
        Matplotlib figure
    """
    display_name = COLUMN_RENAME.get(column, column)
    if title is None:
        title = f'{display_name} by Neighbourhood'

    fig, ax = plt.subplots(figsize=(12, 10))
    gdf.plot(
        column=column,
        cmap=cmap,
        legend=True,
        edgecolor='black',
        linewidth=0.8,
        ax=ax,
        legend_kwds={'label': legend_label or display_name, 'shrink': 0.7},
        missing_kwds={'color': MISSING_COLOR, 'hatch': '///', 'label': 'No data'}
    )

    if label_polygons:
        for _, row in gdf.iterrows():
            point = row.geometry.representative_point()
            ax.annotate(
                str(row['neighbourhood']),
                xy=(point.x, point.y),
                ha='center',
                fontsize=7,
                bbox=dict(boxstyle='round', facecolor='white', alpha=0.6, linewidth=0)
            )

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.axis('off')
    fig.tight_layout()

    return fig


def create_choropleth_map(gdf: gpd.GeoDataFrame, column: str,
                          legend_name: Optional[str] = None,
                          center: Optional[Tuple[float, float]] = None,
                          zoom_start: int = MAP_ZOOM,
                          fill_color: str = HEIGHT_CMAP) -> folium.Map:
    """
    Create an interactive choropleth of a neighbourhood statistic

    Args:
        gdf: Boundary polygons (WGS84) joined with neighbourhood aggregates
        column: Column to colour by
        legend_name: Legend caption (defaults to the column display name)
        center: Map center (lat, lon). If None, use Vancouver
        zoom_start: Initial zoom level
        fill_color: ColorBrewer palette name

    Returns:
        Folium map object
    """
    if center is None:
        center = MAP_CENTER
    if legend_name is None:
        legend_name = COLUMN_RENAME.get(column, column)

    tooltip_cols = [c for c in ['neighbourhood', 'tree_count', 'mean_height_range_id', 'trees_per_km2']
                    if c in gdf.columns]
    if column not in tooltip_cols:
        tooltip_cols.append(column)

    layer = gdf[tooltip_cols + ['geometry']].copy()
    for col in tooltip_cols:
        if col != 'neighbourhood' and layer[col].dtype.kind == 'f':
            layer[col] = layer[col].round(2)

    m = folium.Map(location=center, zoom_start=zoom_start, tiles=MAP_TILES)

    folium.Choropleth(
        geo_data=layer.to_json(),
        data=layer,
        columns=['neighbourhood', column],
        key_on='feature.properties.neighbourhood',
        fill_color=fill_color,
        fill_opacity=0.7,
        line_opacity=0.6,
        nan_fill_color=MISSING_COLOR,
        legend_name=legend_name,
        name=legend_name
    ).add_to(m)

    # Transparent layer carrying the tooltip
    folium.GeoJson(
        layer.to_json(),
        name='Details',
        style_function=lambda feature: {'fillOpacity': 0, 'weight': 0},
        tooltip=folium.GeoJsonTooltip(
            fields=tooltip_cols,
            aliases=[COLUMN_RENAME.get(c, c) for c in tooltip_cols]
        )
    ).add_to(m)

    folium.LayerControl().add_to(m)

    return m
