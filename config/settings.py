"""
Analysis settings for the Vancouver Street Trees EDA
Column names, height ranges, colors, and plotting constants
"""

# Source columns (City of Vancouver street tree export)
TREE_ID_COL = 'TREE_ID'
NEIGHBOURHOOD_COL = 'NEIGHBOURHOOD_NAME'
HEIGHT_ID_COL = 'HEIGHT_RANGE_ID'
HEIGHT_LABEL_COL = 'HEIGHT_RANGE'

REQUIRED_COLUMNS = [
    TREE_ID_COL,
    NEIGHBOURHOOD_COL,
    HEIGHT_ID_COL,
    HEIGHT_LABEL_COL
]

# Used when present, never required
OPTIONAL_COLUMNS = [
    'GENUS_NAME',
    'SPECIES_NAME',
    'COMMON_NAME',
    'DIAMETER',
    'DATE_PLANTED',
    'STREET_SIDE_NAME'
]

# The open data portal exports with ';'
DEFAULT_DELIMITER = ';'
CANDIDATE_DELIMITERS = [';', ',', '\t', '|']

# Boundary shapefile name column
BOUNDARY_NAME_COL = 'name'

# Height ranges: id 0-9 are 10 ft bins, id 10 is everything above 100 ft
HEIGHT_RANGE_MIN = 0
HEIGHT_RANGE_MAX = 10
HEIGHT_RANGE_LABELS = {
    **{i: f"{i * 10}' - {(i + 1) * 10}'" for i in range(HEIGHT_RANGE_MAX)},
    HEIGHT_RANGE_MAX: ">100'"
}

# Trees at or above this id (30 ft) count as tall
TALL_TREE_MIN_HEIGHT_ID = 3

# Coordinate reference systems
WGS84 = 'EPSG:4326'
UTM_10N = 'EPSG:26910'  # metres, used for areas

# Map Settings
MAP_CENTER = [49.2527, -123.1207]  # Vancouver
MAP_ZOOM = 12
MAP_TILES = 'cartodbpositron'

# Figure settings
FIGURE_DPI = 200
SEABORN_STYLE = 'whitegrid'
FIGURE_SIZE = (12, 6)

# Colormaps
HEIGHT_CMAP = 'YlGn'
COUNT_CMAP = 'Greens'
DENSITY_CMAP = 'BuGn'
MISSING_COLOR = 'lightgrey'

# Chart Color Palette
CHART_COLORS = [
    '#2e7d32',  # Forest green
    '#66bb6a',  # Light green
    '#8d6e63',  # Bark brown
    '#ffb300',  # Amber
    '#1e88e5',  # Blue
    '#6d4c41',  # Dark brown
]

# Plotly Chart Theme
PLOTLY_THEME = 'plotly_white'

# Column Display Names
COLUMN_RENAME = {
    'neighbourhood': 'Neighbourhood',
    'tree_count': 'Trees',
    'mean_height_range_id': 'Mean Height Range ID',
    'median_height_range_id': 'Median Height Range ID',
    'tall_tree_share': "Share >= 30'",
    'area_km2': 'Area (km²)',
    'trees_per_km2': 'Trees per km²'
}

# Report metadata
REPORT_TITLE = 'Exploratory Data Analysis with Vancouver Street Trees'
REPORT_FILENAME = 'eda_report.md'
SNAPSHOT_FILENAME = 'eda_snapshot.json'
