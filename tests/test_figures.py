"""
Tests for static charts, choropleth maps and interactive outputs.
"""
import pytest
import folium
import matplotlib.pyplot as plt
import plotly.graph_objects as go

from analysis.utils import (
    save_figure,
    plot_height_range_distribution,
    plot_neighbourhood_counts,
    plot_mean_height_by_neighbourhood,
    plot_height_heatmap,
    plot_choropleth,
    create_choropleth_map,
    create_neighbourhood_bar_chart,
    create_height_heatmap,
)
from analysis.reports.generate_all_figures import render_figures
from data_engineering.datasets.build_neighbourhood_dataset import (
    summarize_by_neighbourhood,
    height_range_crosstab,
    join_boundaries,
)


@pytest.fixture
def summary(trees_df):
    return summarize_by_neighbourhood(trees_df)


@pytest.fixture
def crosstab(trees_df):
    return height_range_crosstab(trees_df)


@pytest.fixture
def neighbourhoods(boundaries_gdf, summary):
    return join_boundaries(boundaries_gdf.rename(columns={'name': 'neighbourhood'}), summary)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestStaticCharts:

    def test_height_distribution(self, trees_df):
        fig = plot_height_range_distribution(trees_df)
        assert isinstance(fig, plt.Figure)
        assert len(fig.axes[0].patches) == 6

    def test_neighbourhood_counts_top_n(self, summary):
        fig = plot_neighbourhood_counts(summary, top_n=2)
        assert len(fig.axes[0].patches) == 2

    def test_mean_height_has_city_mean(self, summary):
        fig = plot_mean_height_by_neighbourhood(summary)
        ax = fig.axes[0]
        assert len(ax.patches) == 3
        assert 'City mean (2.08)' in [t.get_text() for t in ax.get_legend().get_texts()]

    @pytest.mark.parametrize('normalize', [True, False])
    def test_heatmap(self, crosstab, normalize):
        fig = plot_height_heatmap(crosstab, normalize=normalize)
        texts = [t.get_text() for t in fig.axes[0].texts]
        assert len(texts) == crosstab.size
        if normalize:
            assert '80%' not in texts and '40%' in texts
        else:
            assert '2' in texts

    def test_save_figure(self, tmp_path, trees_df):
        path = save_figure(plot_height_range_distribution(trees_df), tmp_path / 'out' / 'fig.png')
        assert path.exists()
        assert path.stat().st_size > 0


class TestMaps:

    def test_choropleth_with_missing_values(self, neighbourhoods):
        fig = plot_choropleth(neighbourhoods, 'mean_height_range_id')
        ax = fig.axes[0]
        assert ax.get_title() == 'Mean Height Range ID by Neighbourhood'
        assert len(ax.texts) == 4

    def test_choropleth_without_labels(self, neighbourhoods):
        fig = plot_choropleth(neighbourhoods, 'tree_count', title='Trees', label_polygons=False)
        assert fig.axes[0].get_title() == 'Trees'
        assert len(fig.axes[0].texts) == 0

    def test_interactive_map(self, tmp_path, neighbourhoods):
        m = create_choropleth_map(neighbourhoods, 'trees_per_km2')
        assert isinstance(m, folium.Map)

        path = tmp_path / 'map.html'
        m.save(str(path))
        html = path.read_text(encoding='utf-8')
        assert 'Stanley Park' in html
        assert 'Trees per km' in html


class TestInteractiveCharts:

    def test_bar_chart(self, summary):
        fig = create_neighbourhood_bar_chart(summary, top_n=2)
        assert isinstance(fig, go.Figure)
        assert list(fig.data[0].x) == ['Kitsilano', 'Arbutus-Ridge']

    def test_heatmap(self, crosstab):
        fig = create_height_heatmap(crosstab)
        assert len(fig.data[0].z) == len(crosstab)
        assert list(fig.data[0].x) == list(crosstab.columns)


def test_render_figures_without_boundaries(tmp_path, trees_df, summary, crosstab, capsys):
    written = render_figures(trees_df, summary, crosstab, None,
                             tmp_path / 'figures', tmp_path / 'maps')

    assert 'choropleth_height' not in written
    assert 'interactive_map' not in written
    assert 'skipping choropleth' in capsys.readouterr().out
    assert all(path.exists() for path in written.values())


def test_render_figures_all_groups(tmp_path, trees_df, summary, crosstab, neighbourhoods):
    written = render_figures(trees_df, summary, crosstab, neighbourhoods,
                             tmp_path / 'figures', tmp_path / 'maps')

    assert set(written) == {
        'height_distribution', 'neighbourhood_counts', 'mean_height', 'height_heatmap',
        'choropleth_height', 'choropleth_count', 'choropleth_density',
        'interactive_counts', 'interactive_heatmap', 'interactive_map',
    }
    assert all(path.exists() for path in written.values())


def test_render_selected_groups(tmp_path, trees_df, summary, crosstab):
    written = render_figures(trees_df, summary, crosstab, None,
                             tmp_path / 'figures', tmp_path / 'maps', groups=['heatmap'])
    assert list(written) == ['height_heatmap']


def test_render_figures_without_neighbourhoods(tmp_path, trees_df, summary, crosstab, neighbourhoods, capsys):
    empty = trees_df.iloc[0:0]
    written = render_figures(empty, summary.iloc[0:0], crosstab.iloc[0:0], neighbourhoods,
                             tmp_path / 'figures', tmp_path / 'maps')

    assert list(written) == ['height_distribution']
    assert 'No neighbourhood data' in capsys.readouterr().out
