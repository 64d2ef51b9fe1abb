"""Google encoded polyline codec.

Each coordinate is stored as the delta from the previous point, scaled by 1e5,
zig-zag encoded and emitted as 5-bit chunks (least significant first) offset
into printable ASCII by 63. A chunk with 0x20 set is followed by another chunk
of the same value.

Decoding is best-effort: input that ends in the middle of a value stops the
decode and returns the complete points read so far. It never raises.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


PRECISION = 1e5
_CHUNK_BITS = 5
_CHUNK_MASK = 0x1F
_CONTINUATION = 0x20
_ASCII_OFFSET = 63


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


def _round_half_away(value: float) -> int:
    scaled = abs(value) * PRECISION
    rounded = int(math.floor(scaled + 0.5))
    return -rounded if value < 0 else rounded


def _read_value(data: bytes, index: int) -> tuple[int, int] | None:
    """Read one zig-zag value starting at `index`; None if the stream ends mid-value."""
    result = 0
    shift = 0
    length = len(data)
    while True:
        if index >= length:
            return None
        chunk = data[index] - _ASCII_OFFSET
        index += 1
        result |= (chunk & _CHUNK_MASK) << shift
        shift += _CHUNK_BITS
        if chunk < _CONTINUATION:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode(encoded: str | None) -> list[Coordinate]:
    if not encoded:
        return []
    data = encoded.encode("ascii", errors="replace")
    coordinates: list[Coordinate] = []
    index = 0
    latitude = 0
    longitude = 0
    while index < len(data):
        lat_read = _read_value(data, index)
        if lat_read is None:
            break
        d_lat, index = lat_read
        lng_read = _read_value(data, index)
        if lng_read is None:
            break
        d_lng, index = lng_read
        latitude += d_lat
        longitude += d_lng
        coordinates.append(Coordinate(lat=latitude / PRECISION, lng=longitude / PRECISION))
    return coordinates


def _encode_value(value: int) -> str:
    v = ~(value << 1) if value < 0 else value << 1
    chars: list[str] = []
    while v >= _CONTINUATION:
        chars.append(chr(((v & _CHUNK_MASK) | _CONTINUATION) + _ASCII_OFFSET))
        v >>= _CHUNK_BITS
    chars.append(chr(v + _ASCII_OFFSET))
    return "".join(chars)


def encode(coordinates: Iterable[Coordinate]) -> str:
    parts: list[str] = []
    prev_lat = 0
    prev_lng = 0
    for coord in coordinates:
        lat = _round_half_away(coord.lat)
        lng = _round_half_away(coord.lng)
        parts.append(_encode_value(lat - prev_lat))
        parts.append(_encode_value(lng - prev_lng))
        prev_lat = lat
        prev_lng = lng
    return "".join(parts)


def generate_route(start: Coordinate, end: Coordinate, point_count: int = 30) -> str:
    """
    Build a deterministic waterway-like route between two points.

    Two sine waves are layered over the straight line so the route meanders
    the way a river does. Used for fixtures and demo sessions.
    """
    if point_count < 1:
        return ""
    if point_count == 1:
        return encode([start])
    coords: list[Coordinate] = []
    for i in range(point_count):
        t = i / (point_count - 1)
        wave1 = math.sin(t * math.pi * 3) * 0.002
        wave2 = math.sin(t * math.pi * 5) * 0.001
        coords.append(
            Coordinate(
                lat=start.lat + (end.lat - start.lat) * t + wave1,
                lng=start.lng + (end.lng - start.lng) * t + wave2,
            )
        )
    return encode(coords)


def generate_loop_route(
    center: Coordinate,
    radius_degrees: float = 0.008,
    point_count: int = 40,
) -> str:
    """Build a closed wobbly loop around `center` (last point repeats the first)."""
    if point_count < 1:
        return ""
    coords: list[Coordinate] = []
    for i in range(point_count):
        angle = (i / point_count) * 2 * math.pi
        wobble = math.sin(angle * 3) * radius_degrees * 0.3
        coords.append(
            Coordinate(
                lat=center.lat + (radius_degrees + wobble) * math.sin(angle),
                # Stretch longitude so the loop looks round at UK latitudes.
                lng=center.lng + (radius_degrees + wobble) * math.cos(angle) * 1.4,
            )
        )
    coords.append(coords[0])
    return encode(coords)


__all__ = [
    "Coordinate",
    "PRECISION",
    "decode",
    "encode",
    "generate_loop_route",
    "generate_route",
]
