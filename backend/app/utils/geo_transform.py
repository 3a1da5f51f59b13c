# backend/app/utils/geo_transform.py

"""
TM128 (KATEC) planar coordinates -> WGS84 latitude / longitude.

Naver Local Search returns ``mapx`` / ``mapy`` in the legacy Korean
TM128 system: Bessel 1841 ellipsoid, central meridian 128E, origin
latitude 38N, scale factor 0.9999, false easting 400000 m, false
northing 600000 m.

The conversion is the closed-form inverse Transverse Mercator series
(Snyder, "Map Projections - A Working Manual", eq. 8-18 .. 8-25) kept to
the first-order terms that matter inside South Korea. No datum shift is
applied. Pure and deterministic: defined for every finite input.
"""

import math
from typing import Dict


# Bessel 1841
BESSEL_A = 6377397.155
BESSEL_F = 1 / 299.1528128

# TM128 projection origin
ORIGIN_LAT_DEG = 38.0
CENTRAL_MERIDIAN_DEG = 128.0
SCALE_FACTOR = 0.9999
FALSE_EASTING = 400000.0
FALSE_NORTHING = 600000.0

_E2 = 2 * BESSEL_F - BESSEL_F * BESSEL_F
_E4 = _E2 * _E2
_E6 = _E4 * _E2
_EP2 = _E2 / (1 - _E2)
_E1 = (1 - math.sqrt(1 - _E2)) / (1 + math.sqrt(1 - _E2))

_ARC_C0 = 1 - _E2 / 4 - 3 * _E4 / 64 - 5 * _E6 / 256
_ARC_C2 = 3 * _E2 / 8 + 3 * _E4 / 32 + 45 * _E6 / 1024
_ARC_C4 = 15 * _E4 / 256 + 45 * _E6 / 1024
_ARC_C6 = 35 * _E6 / 3072


def meridian_arc(phi: float) -> float:
    """Distance in meters along the Bessel meridian from the equator to latitude ``phi`` (radians)."""
    return BESSEL_A * (
        _ARC_C0 * phi
        - _ARC_C2 * math.sin(2 * phi)
        + _ARC_C4 * math.sin(4 * phi)
        - _ARC_C6 * math.sin(6 * phi)
    )


_M0 = meridian_arc(math.radians(ORIGIN_LAT_DEG))


def _footpoint_latitude(m: float) -> float:
    mu = m / (BESSEL_A * _ARC_C0)
    e1 = _E1
    return (
        mu
        + (3 * e1 / 2 - 27 * e1 ** 3 / 32) * math.sin(2 * mu)
        + (21 * e1 ** 2 / 16 - 55 * e1 ** 4 / 32) * math.sin(4 * mu)
        + (151 * e1 ** 3 / 96) * math.sin(6 * mu)
    )


def tm128_to_wgs84(mapx: float, mapy: float) -> Dict[str, float]:
    """
    Convert a TM128 pair to geographic degrees.

    Returns:
        {"lat": float, "lng": float}
    """
    x = (mapx - FALSE_EASTING) / SCALE_FACTOR
    y = (mapy - FALSE_NORTHING) / SCALE_FACTOR

    phi1 = _footpoint_latitude(_M0 + y)

    sin_phi1 = math.sin(phi1)
    cos_phi1 = math.cos(phi1)
    tan_phi1 = math.tan(phi1)

    c1 = _EP2 * cos_phi1 * cos_phi1
    t1 = tan_phi1 * tan_phi1
    n1 = BESSEL_A / math.sqrt(1 - _E2 * sin_phi1 * sin_phi1)
    r1 = BESSEL_A * (1 - _E2) / (1 - _E2 * sin_phi1 * sin_phi1) ** 1.5
    d = x / n1

    lat_rad = phi1 - (n1 * tan_phi1 / r1) * (
        d * d / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * _EP2) * d ** 4 / 24
    )
    lng_rad = math.radians(CENTRAL_MERIDIAN_DEG) + (
        d - (1 + 2 * t1 + c1) * d ** 3 / 6
    ) / cos_phi1

    return {
        "lat": math.degrees(lat_rad),
        "lng": math.degrees(lng_rad),
    }
