"""
Conclusions and Limitations

Turns the neighbourhood aggregates into plain-language findings, each with
the caveat that qualifies it, and lists the limitations of the analysis.
"""

from dataclasses import dataclass
from typing import List, Optional, Dict

import pandas as pd

from config.settings import TREE_ID_COL, HEIGHT_ID_COL, HEIGHT_RANGE_LABELS


@dataclass
class Finding:
    """A single conclusion drawn from the data"""
    title: str
    statement: str
    caveat: str = ''


def _title(name) -> str:
    return str(name).title()


def count_height_correlation(summary: pd.DataFrame) -> Optional[float]:
    """
    Spearman rank correlation between tree count and mean height id

    Returns None with fewer than three neighbourhoods or no variation.
    """
    data = summary.dropna(subset=['tree_count', 'mean_height_range_id'])
    if len(data) < 3:
        return None
    counts = data['tree_count'].rank()
    heights = data['mean_height_range_id'].rank()
    if counts.nunique() < 2 or heights.nunique() < 2:
        return None
    return float(counts.corr(heights))


def describe_correlation(rho: float) -> str:
    strength = abs(rho)
    if strength < 0.1:
        word = 'no meaningful'
    elif strength < 0.3:
        word = 'a weak'
    elif strength < 0.6:
        word = 'a moderate'
    else:
        word = 'a strong'
    direction = '' if strength < 0.1 else (' positive' if rho > 0 else ' negative')
    return f'{word}{direction}'


def draw_conclusions(summary: pd.DataFrame, trees: pd.DataFrame) -> List[Finding]:
    """
    Draw the headline findings from the neighbourhood summary

    Args:
        summary: Output of summarize_by_neighbourhood
        trees: Tree table (for the city-wide height distribution)

    Returns:
        List of findings in reading order
    """
    findings = []
    ranked = summary.dropna(subset=['mean_height_range_id'])

    # Comparisons need at least two neighbourhoods
    if len(ranked) >= 2:
        by_height = ranked.sort_values(['mean_height_range_id', 'neighbourhood'], ascending=[False, True])
        tallest = by_height.iloc[0]
        shortest = by_height.iloc[-1]
        findings.append(Finding(
            title='Tallest and shortest neighbourhoods',
            statement=(
                f"{_title(tallest['neighbourhood'])} has the highest mean height range id "
                f"({tallest['mean_height_range_id']:.2f}) and {_title(shortest['neighbourhood'])} "
                f"the lowest ({shortest['mean_height_range_id']:.2f})."
            ),
            caveat=(
                'Height range ids are 10 ft bins, so a mean id ranks neighbourhoods '
                'but does not translate into an average height in feet.'
            )
        ))

    if len(summary) >= 2:
        by_count = summary.sort_values(['tree_count', 'neighbourhood'], ascending=[False, True])
        most = by_count.iloc[0]
        fewest = by_count.iloc[-1]
        findings.append(Finding(
            title='Where the street trees are',
            statement=(
                f"{_title(most['neighbourhood'])} has the most street trees ({int(most['tree_count']):,}) "
                f"and {_title(fewest['neighbourhood'])} the fewest ({int(fewest['tree_count']):,})."
            ),
            caveat=(
                'Raw counts follow neighbourhood size and street length; '
                'compare trees per km² before reading them as greenness.'
            )
        ))

    if 'trees_per_km2' in summary.columns:
        dense = summary.dropna(subset=['trees_per_km2'])
        if len(dense) > 0:
            top = dense.sort_values('trees_per_km2', ascending=False).iloc[0]
            findings.append(Finding(
                title='Density',
                statement=(
                    f"Normalised by area, {_title(top['neighbourhood'])} is the densest "
                    f"with {top['trees_per_km2']:,.0f} street trees per km²."
                ),
                caveat='Area includes parks and water, where there are no street trees.'
            ))

    heights = pd.to_numeric(trees[HEIGHT_ID_COL], errors='coerce').dropna().astype(int)
    if len(heights) > 0:
        counts = heights.value_counts()
        mode_id = int(counts.idxmax())
        share = counts.max() / len(heights) * 100
        findings.append(Finding(
            title='Typical street tree',
            statement=(
                f"The most common height range is {HEIGHT_RANGE_LABELS.get(mode_id, str(mode_id))} "
                f"(id {mode_id}), covering {share:.1f}% of trees with a recorded height."
            )
        ))

    rho = count_height_correlation(summary)
    if rho is not None:
        findings.append(Finding(
            title='Do more trees mean taller trees?',
            statement=(
                f"Across neighbourhoods there is {describe_correlation(rho)} rank correlation "
                f"between tree count and mean height range id (Spearman ρ = {rho:.2f})."
            ),
            caveat='A correlation across neighbourhoods says nothing about individual streets or causes.'
        ))

    return findings


def limitations(trees: pd.DataFrame, unmatched: Optional[Dict[str, List[str]]] = None) -> List[str]:
    """
    Limitations of the analysis, specific to the data where possible

    Args:
        trees: Tree table
        unmatched: Output of unmatched_neighbourhoods, if the join was run
    """
    notes = [
        'Heights are recorded as 10 ft ranges, not measurements; averages of range ids are approximations.',
        'Counts are not normalised by street length, so long-street neighbourhoods look greener.',
        'The data covers City-managed street trees only; park and private trees are not included.',
        'The export is a snapshot: plantings and removals after the export date are not reflected.'
    ]

    missing = trees.isnull().sum()
    missing = missing[missing > 0]
    if len(missing) > 0:
        cols = ', '.join(f'{col} ({count:,})' for col, count in missing.items())
        notes.append(f'Some records have missing values: {cols}.')

    if TREE_ID_COL in trees.columns:
        dup_ids = int(trees[TREE_ID_COL].dropna().duplicated().sum())
        if dup_ids > 0:
            notes.append(f'{dup_ids:,} tree ids appear more than once; those trees are counted twice.')

    if unmatched:
        if unmatched.get('only_in_trees'):
            names = ', '.join(_title(n) for n in unmatched['only_in_trees'])
            notes.append(f'Trees in {names} have no matching boundary polygon and are absent from the maps.')
        if unmatched.get('only_in_boundaries'):
            names = ', '.join(_title(n) for n in unmatched['only_in_boundaries'])
            notes.append(f'No trees matched the polygons for {names}.')

    return notes
