"""Regional boundary checks for coordinates, encoded routes and sessions."""
from __future__ import annotations

import logging

from .config import EngineConfig, resolve_config
from .models import Session
from .polyline import Coordinate, decode

logger = logging.getLogger(__name__)


def is_in_region(latitude: float, longitude: float, config: EngineConfig | None = None) -> bool:
    return resolve_config(config).region.contains(latitude, longitude)


def is_coordinate_in_region(coord: Coordinate, config: EngineConfig | None = None) -> bool:
    return is_in_region(coord.lat, coord.lng, config)


def sample_indices(point_count: int, sample_count: int = 10) -> list[int]:
    """
    Indices checked for a route of `point_count` points.

    Every Nth point with N = max(1, point_count // sample_count), plus the
    first and last points, which are always checked.
    """
    if point_count <= 0:
        return []
    step = max(1, point_count // sample_count)
    indices = set(range(0, point_count, step))
    indices.add(0)
    indices.add(point_count - 1)
    return sorted(indices)


def validate_route(polyline: str | None, config: EngineConfig | None = None) -> bool:
    """
    Check a sampled subset of an encoded route against the region.

    A route that decodes to no points is governed by config.empty_route_valid
    (False by default, i.e. an unreadable route fails).
    """
    cfg = resolve_config(config)
    coords = decode(polyline)
    if not coords:
        logger.debug(f"Route has no decodable points; empty_route_valid={cfg.empty_route_valid}")
        return cfg.empty_route_valid
    for idx in sample_indices(len(coords), cfg.route_sample_count):
        coord = coords[idx]
        if not cfg.region.contains(coord.lat, coord.lng):
            logger.debug(f"Route point {idx} ({coord.lat}, {coord.lng}) is outside the region")
            return False
    return True


def validate_session_location(session: Session, config: EngineConfig | None = None) -> bool:
    """Start and end locations that are present must be in the region; at least one is required."""
    if session.start_location is None and session.end_location is None:
        return False
    for coord in (session.start_location, session.end_location):
        if coord is not None and not is_coordinate_in_region(coord, config):
            return False
    return True


__all__ = [
    "is_coordinate_in_region",
    "is_in_region",
    "sample_indices",
    "validate_route",
    "validate_session_location",
]
