"""
Reproducibility snapshots

Captures the numbers behind the report (record count, per-neighbourhood
aggregates, height distribution) so a re-run on the same inputs can be
checked against a previous run.

Usage:
    snapshot = summary_snapshot(trees, summary)
    write_snapshot(snapshot, REPORTS / 'eda_snapshot.json')
    differences = compare_snapshots(load_snapshot(path), snapshot)
"""

import json
import hashlib
from pathlib import Path
from typing import Dict, Any, List

import pandas as pd

from config.settings import HEIGHT_ID_COL

ROUND_DIGITS = 6


def summary_snapshot(trees: pd.DataFrame, summary: pd.DataFrame) -> Dict[str, Any]:
    """Plain-JSON view of the summary counts and plot data"""
    heights = pd.to_numeric(trees[HEIGHT_ID_COL], errors='coerce').dropna().astype(int)
    height_counts = heights.value_counts().sort_index()

    neighbourhoods = {}
    for _, row in summary.sort_values('neighbourhood').iterrows():
        mean = row['mean_height_range_id']
        neighbourhoods[str(row['neighbourhood'])] = {
            'tree_count': int(row['tree_count']),
            'mean_height_range_id': None if pd.isna(mean) else round(float(mean), ROUND_DIGITS)
        }

    return {
        'records': int(len(trees)),
        'height_distribution': {str(h): int(c) for h, c in height_counts.items()},
        'neighbourhoods': neighbourhoods
    }


def snapshot_digest(snapshot: Dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON form"""
    canonical = json.dumps(snapshot, sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(canonical.encode('utf-8')).hexdigest()


def compare_snapshots(previous: Dict[str, Any], current: Dict[str, Any]) -> List[str]:
    """
    List differences between two snapshots

    Returns:
        Human-readable differences, empty when the runs agree
    """
    differences = []

    if previous.get('records') != current.get('records'):
        differences.append(f"records: {previous.get('records')} → {current.get('records')}")

    prev_heights = previous.get('height_distribution', {})
    curr_heights = current.get('height_distribution', {})
    for key in sorted(set(prev_heights) | set(curr_heights), key=int):
        if prev_heights.get(key) != curr_heights.get(key):
            differences.append(f"height {key}: {prev_heights.get(key)} → {curr_heights.get(key)}")

    prev_hoods = previous.get('neighbourhoods', {})
    curr_hoods = current.get('neighbourhoods', {})
    for name in sorted(set(prev_hoods) | set(curr_hoods)):
        if name not in prev_hoods:
            differences.append(f"{name}: added")
        elif name not in curr_hoods:
            differences.append(f"{name}: removed")
        else:
            for field in ('tree_count', 'mean_height_range_id'):
                before, after = prev_hoods[name].get(field), curr_hoods[name].get(field)
                if before != after:
                    differences.append(f"{name} {field}: {before} → {after}")

    return differences


def write_snapshot(snapshot: Dict[str, Any], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = dict(snapshot, digest=snapshot_digest(snapshot))
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, sort_keys=True, ensure_ascii=False)
    return path


def load_snapshot(path: Path) -> Dict[str, Any]:
    """Load a snapshot written by write_snapshot, without its digest"""
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)
    payload.pop('digest', None)
    return payload
