"""
End-to-end tests for the Markdown EDA report.
"""
import sys
import json

import pytest
import matplotlib.pyplot as plt

from analysis.reports.eda_report import generate_report, main


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_report_sections(tmp_path, trees_csv, boundary_shp):
    report_path = generate_report(trees_csv, boundary_shp, tmp_path / 'report')
    text = report_path.read_text(encoding='utf-8')

    for heading in ['## 1. Objective', '## 2. Loading the data', '## 3. Inspecting structure',
                    '## 4. Missing and duplicate values', '## 5. Visualising',
                    '## 6. Conclusions', '## 7. Limitations']:
        assert heading in text

    assert '**12 trees**' in text
    assert 'There are no missing values' in text
    assert 'Kitsilano has the highest mean height range id' in text
    assert 'No trees matched the polygons for Stanley Park.' in text


def test_report_links_relative_figures(tmp_path, trees_csv, boundary_shp):
    output_dir = tmp_path / 'report'
    text = generate_report(trees_csv, boundary_shp, output_dir).read_text(encoding='utf-8')

    assert '](figures/choropleth_mean_height.png)' in text
    assert '](maps/mean_height_map.html)' in text
    assert (output_dir / 'figures' / 'height_heatmap.png').exists()
    assert str(tmp_path) not in text


def test_report_without_boundaries(tmp_path, trees_csv):
    text = generate_report(trees_csv, None, tmp_path / 'report').read_text(encoding='utf-8')

    assert '*(Mean height range id: not generated)*' in text
    assert 'choropleth_density.png' not in text
    assert 'Normalised by area' not in text


def test_snapshot_written_and_compared(tmp_path, trees_csv, boundary_shp, capsys):
    output_dir = tmp_path / 'report'
    generate_report(trees_csv, boundary_shp, output_dir)

    snapshot = json.loads((output_dir / 'eda_snapshot.json').read_text(encoding='utf-8'))
    assert snapshot['records'] == 12
    assert len(snapshot['digest']) == 64

    capsys.readouterr()
    text = generate_report(trees_csv, boundary_shp, output_dir).read_text(encoding='utf-8')
    assert 'Summary numbers match the previous run' in capsys.readouterr().out
    assert snapshot['digest'] in text


def test_report_notes_missing_and_duplicates(tmp_path, trees_df):
    trees_df.loc[0, 'GENUS_NAME'] = None
    trees_df.loc[1, 'TREE_ID'] = trees_df.loc[2, 'TREE_ID']
    path = tmp_path / 'street-trees.csv'
    trees_df.to_csv(path, sep=';', index=False)

    text = generate_report(path, None, tmp_path / 'report').read_text(encoding='utf-8')
    assert 'Columns with missing values' in text
    assert '1 duplicate `TREE_ID` values' in text


def test_report_from_header_only_csv(tmp_path, capsys):
    path = tmp_path / 'street-trees.csv'
    path.write_text('TREE_ID;NEIGHBOURHOOD_NAME;HEIGHT_RANGE_ID;HEIGHT_RANGE\n', encoding='utf-8')

    text = generate_report(path, None, tmp_path / 'report').read_text(encoding='utf-8')

    assert '**0 trees**' in text
    assert '*(Height range heatmap: not generated)*' in text
    assert '*(Mean height range id by neighbourhood: not generated)*' in text
    assert 'No neighbourhood data' in capsys.readouterr().out


def test_split_neighbourhood_listed_once(tmp_path, trees_csv, split_boundaries_gdf):
    boundary_path = tmp_path / 'split-boundary.shp'
    split_boundaries_gdf.to_file(boundary_path)

    text = generate_report(trees_csv, boundary_path, tmp_path / 'report').read_text(encoding='utf-8')

    table = text.split('The numbers behind the maps:')[1].split('## 6. Conclusions')[0]
    assert table.count('KITSILANO') == 1


def test_main_returns_1_on_schema_failure(tmp_path, monkeypatch, invalid_trees_csv, capsys):
    monkeypatch.setattr(sys, 'argv', [
        'eda_report', '--trees', str(invalid_trees_csv), '--no-maps',
        '--output-dir', str(tmp_path / 'report'),
    ])
    assert main() == 1
    assert not (tmp_path / 'report' / 'eda_report.md').exists()
