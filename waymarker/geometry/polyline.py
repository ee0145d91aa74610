"""Encoded polyline support for route previews.

Decoding is done here so truncated strings raise :class:`DecodeError` with
the failing offset; encoding is delegated to the ``polyline`` package.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import polyline as polyline_lib

from ..config import POLYLINE_PRECISION
from ..errors import DecodeError
from ..models import LatLon

_CHAR_BIAS = 63
_CONTINUATION_BIT = 0x20
_CHUNK_MASK = 0x1F


def decode(encoded: str, precision: int = POLYLINE_PRECISION) -> List[LatLon]:
    """Decode an encoded polyline string into a list of ``(lat, lon)`` tuples.

    Raises:
        DecodeError: If the string ends in the middle of a value or contains a
            character outside the encoding alphabet.
    """

    if not encoded:
        return []
    factor = float(10**precision)
    coordinates: List[LatLon] = []
    index = 0
    lat = 0
    lng = 0
    length = len(encoded)
    while index < length:
        delta_lat, index = _read_value(encoded, index)
        if index >= length:
            raise DecodeError(
                "Polyline ends after a latitude without a longitude", offset=index
            )
        delta_lng, index = _read_value(encoded, index)
        lat += delta_lat
        lng += delta_lng
        coordinates.append((lat / factor, lng / factor))
    return coordinates


def encode(
    coordinates: Iterable[Sequence[float]], precision: int = POLYLINE_PRECISION
) -> str:
    """Encode ``(lat, lon)`` pairs into a polyline string."""

    pairs: List[Tuple[float, float]] = [
        (float(lat), float(lon)) for lat, lon in coordinates
    ]
    if not pairs:
        return ""
    return polyline_lib.encode(pairs, precision)


def _read_value(encoded: str, index: int) -> Tuple[int, int]:
    """Read one zigzag-encoded delta starting at ``index``.

    Returns the signed delta and the index of the next unread character.
    """

    result = 0
    shift = 0
    length = len(encoded)
    while True:
        if index >= length:
            raise DecodeError("Polyline ends mid-value", offset=index)
        chunk = ord(encoded[index]) - _CHAR_BIAS
        if chunk < 0:
            raise DecodeError(
                f"Invalid polyline character {encoded[index]!r}", offset=index
            )
        index += 1
        result |= (chunk & _CHUNK_MASK) << shift
        shift += 5
        if chunk < _CONTINUATION_BIT:
            break
    if result & 1:
        return ~(result >> 1), index
    return result >> 1, index


__all__ = ["decode", "encode"]
