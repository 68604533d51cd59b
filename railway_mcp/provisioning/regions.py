"""Region selection for service placement."""

from enum import Enum
from typing import Union

from ..errors import InvalidRegion


class RegionCode(str, Enum):
    """Regions a Railway service instance can be placed in."""

    US_WEST1 = "us-west1"
    US_WEST2 = "us-west2"
    US_EAST4 = "us-east4"
    US_EAST4_METAL = "us-east4-eqdc4a"
    EUROPE_WEST4 = "europe-west4"
    EUROPE_WEST4_METAL = "europe-west4-drams3a"
    ASIA_SOUTHEAST1 = "asia-southeast1"
    ASIA_SOUTHEAST1_METAL = "asia-southeast1-eqsg3a"


SUPPORTED_REGIONS = [region.value for region in RegionCode]


def select_region(candidate: Union[RegionCode, str, None]) -> RegionCode:
    """Return the region the caller asked for.

    The candidate must be one of ``RegionCode``; nothing is guessed from other
    signals, so a missing or unknown region is rejected.
    """
    if isinstance(candidate, RegionCode):
        return candidate
    try:
        return RegionCode(candidate)
    except ValueError:
        raise InvalidRegion(candidate, SUPPORTED_REGIONS) from None
