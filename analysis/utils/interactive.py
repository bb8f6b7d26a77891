"""
Interactive chart utilities for the Vancouver Street Trees EDA
Plotly versions of the bar chart and heatmap for the HTML outputs
"""

import plotly.graph_objects as go
import pandas as pd
from typing import Optional

from config.settings import PLOTLY_THEME


def create_neighbourhood_bar_chart(summary: pd.DataFrame, value_col: str = 'tree_count',
                                   top_n: Optional[int] = None,
                                   title: str = 'Street Trees per Neighbourhood') -> go.Figure:
    """
    Create a bar chart of a neighbourhood statistic

    Args:
        summary: Neighbourhood summary
        value_col: Column to plot
        top_n: Number of neighbourhoods to show (None for all)
        title: Chart title

    Returns:
        Plotly figure
    """
    data = summary.dropna(subset=[value_col]).sort_values(value_col, ascending=False)
    if top_n is not None:
        data = data.head(top_n)

    fig = go.Figure(data=[go.Bar(
        x=data['neighbourhood'].str.title(),
        y=data[value_col],
        marker=dict(
            color=data[value_col],
            colorscale='Greens',
            showscale=False
        ),
        hovertemplate='%{x}<br>%{y:,.2f}<extra></extra>'
    )])

    fig.update_layout(
        title=title,
        xaxis_title='Neighbourhood',
        yaxis_title=value_col.replace('_', ' ').title(),
        template=PLOTLY_THEME,
        height=500,
        xaxis_tickangle=-45
    )

    return fig


def create_height_heatmap(crosstab: pd.DataFrame, normalize: bool = True,
                          title: str = 'Trees by Neighbourhood and Height Range') -> go.Figure:
    """
    Create a heatmap of neighbourhood x height range

    Args:
        crosstab: Output of height_range_crosstab (counts)
        normalize: Colour by row share instead of raw counts
        title: Chart title

    Returns:
        Plotly figure
    """
    table = crosstab
    if normalize:
        table = crosstab.div(crosstab.sum(axis=1), axis=0).fillna(0)

    fig = go.Figure(data=go.Heatmap(
        z=table.values,
        x=list(table.columns),
        y=[str(name).title() for name in table.index],
        colorscale='YlGn',
        text=table.values.round(2),
        texttemplate='%{text:.0%}' if normalize else '%{text:,}',
        textfont={"size": 9},
        colorbar=dict(title='Share' if normalize else 'Trees')
    ))

    fig.update_layout(
        title=title,
        xaxis_title='Height Range',
        yaxis_title='Neighbourhood',
        template=PLOTLY_THEME,
        height=max(500, 28 * len(table)),
        yaxis=dict(autorange='reversed')
    )

    return fig
