"""
I/O utilities for the route optimizer.

Handles stops CSV parsing, route/history CSV export, YAML metadata sidecars
and output folder management.
"""

import csv
from pathlib import Path
from typing import Hashable, List, Mapping, Optional, Union

import yaml

from .data_models import OptimizationResult, Stop
from .distance import leg_distances

LATITUDE_COLUMNS = ('latitude', 'lat')
LONGITUDE_COLUMNS = ('longitude', 'lng', 'lon')


def load_stops_csv(csv_path: Union[str, Path]) -> List[Stop]:
    """
    Load stops from a CSV file.

    CSV format:
        id,latitude,longitude
        gaborone_bus_rank,-24.6569,25.9086
        main_mall,-24.6545,25.9120
        ...

    The short column names lat/lng (or lon) are accepted as well.

    Args:
        csv_path: Path to CSV file

    Returns:
        Stops in file order

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format or a row is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    stops = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        lat_col, lng_col = _coordinate_columns(reader.fieldnames, csv_path)

        for line_number, row in enumerate(reader, start=2):
            try:
                stops.append(Stop(
                    id=row['id'].strip(),
                    latitude=float(row[lat_col]),
                    longitude=float(row[lng_col]),
                ))
            except (AttributeError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid stop in {csv_path} line {line_number}: {e}")

    return stops


def _coordinate_columns(fieldnames: Optional[List[str]], csv_path: Path) -> tuple:
    """Resolve the id/latitude/longitude column names of a stops CSV."""
    fieldnames = fieldnames or []
    lat_col = next((c for c in LATITUDE_COLUMNS if c in fieldnames), None)
    lng_col = next((c for c in LONGITUDE_COLUMNS if c in fieldnames), None)

    if 'id' not in fieldnames or lat_col is None or lng_col is None:
        raise ValueError(
            f"Invalid CSV format in {csv_path}. Expected columns: id,latitude,longitude"
        )
    return lat_col, lng_col


def save_route_csv(
    result: OptimizationResult,
    stop_index: Mapping[Hashable, Stop],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save an optimized route to CSV.

    CSV format:
        order,id,latitude,longitude,leg_km
        0,main_mall,-24.6545,25.9120,0.0
        1,gaborone_bus_rank,-24.6569,25.9086,0.43
        ...

    leg_km is the distance from the previous stop (0.0 for the first).

    Args:
        result: Optimization result
        stop_index: Mapping of stop id to Stop
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    stops = [stop_index[stop_id] for stop_id in result.route]
    legs = [0.0] + leg_distances(stops)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['order', 'id', 'latitude', 'longitude', 'leg_km'])
        for order, (stop, leg) in enumerate(zip(stops, legs)):
            writer.writerow([order, stop.id, stop.latitude, stop.longitude, round(leg, 6)])

    return output_path


def load_route_csv(csv_path: Union[str, Path]) -> List[str]:
    """
    Load the stop ids of a saved route, in visiting order.

    Raises:
        FileNotFoundError: If CSV file doesn't exist
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    with open(csv_path, 'r', newline='') as f:
        rows = sorted(csv.DictReader(f), key=lambda row: int(row['order']))

    return [row['id'] for row in rows]


def save_history_csv(
    history: List[float],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save the per-generation best fitness to CSV (columns: generation, best_fitness).

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['generation', 'best_fitness'])
        for generation, fitness in enumerate(history, start=1):
            writer.writerow([generation, fitness])

    return output_path


def save_metadata(
    metadata: dict,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save metadata to YAML sidecar file.

    Args:
        metadata: Metadata dictionary
        output_path: Path for output YAML
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved metadata file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Metadata file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        yaml.safe_dump(metadata, f, default_flow_style=False, sort_keys=False)

    return output_path


def prepare_output_folder(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the run's output folder.

    Raises:
        FileExistsError: If folder already exists and overwrite=False
    """
    root = Path(root)

    if root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    root.mkdir(parents=True, exist_ok=overwrite)
    return root


def validate_stops_csv(csv_path: Union[str, Path]) -> tuple[bool, Optional[str]]:
    """
    Validate that a stops CSV file has the correct format.

    Args:
        csv_path: Path to CSV file

    Returns:
        Tuple of (is_valid, error_message)
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        return False, f"File not found: {csv_path}"

    try:
        stops = load_stops_csv(csv_path)
    except (OSError, ValueError) as e:
        return False, str(e)

    if not stops:
        return False, "CSV file is empty (no stops)"

    ids = [stop.id for stop in stops]
    if len(set(ids)) != len(ids):
        return False, "CSV file contains duplicate stop ids"

    return True, None
