"""
Shaft/bore compatibility.

A motor shaft mates with a gearbox input bore either directly (equal
diameters) or through a catalogued bushing (smaller shaft into a larger
bore). An oversized shaft never fits.
"""

from typing import Iterable, Optional, Union

from gearsel.models.catalog import Bushing


class BushingIndex:
    """
    Exact-pair lookup over the bushing catalog.

    Each (shaft, hole) pair maps to at most one bushing.
    """

    def __init__(self, bushings: Iterable[Bushing]):
        self._by_pair: dict[tuple[float, float], Bushing] = {}
        for bushing in bushings:
            pair = (float(bushing.shaft_mm), float(bushing.hole_mm))
            if pair in self._by_pair:
                raise ValueError(
                    f"Duplicate bushing for shaft {bushing.shaft_mm} mm / hole "
                    f"{bushing.hole_mm} mm: {self._by_pair[pair].code} and {bushing.code}"
                )
            self._by_pair[pair] = bushing

    def get(self, shaft_mm: float, hole_mm: float) -> Optional[Bushing]:
        return self._by_pair.get((float(shaft_mm), float(hole_mm)))

    def __len__(self) -> int:
        return len(self._by_pair)

    def __iter__(self):
        return iter(self._by_pair.values())


BushingSource = Union[BushingIndex, Iterable[Bushing]]


def find_bushing(
    shaft_mm: float,
    bore_mm: float,
    bushings: BushingSource,
) -> Optional[Bushing]:
    """
    Find the bushing for a shaft/bore pair.

    Args:
        shaft_mm: Motor shaft diameter
        bore_mm: Gearbox input bore diameter
        bushings: Bushing catalog (index or plain sequence)

    Returns:
        The matching Bushing, or None when no bushing is needed
        (equal diameters) or none is catalogued for the exact pair.
    """
    if shaft_mm == bore_mm:
        return None
    if isinstance(bushings, BushingIndex):
        return bushings.get(shaft_mm, bore_mm)
    for bushing in bushings:
        if bushing.shaft_mm == shaft_mm and bushing.hole_mm == bore_mm:
            return bushing
    return None


def is_shaft_compatible(
    shaft_mm: float,
    bore_mm: float,
    bushings: BushingSource,
) -> bool:
    """Whether a motor shaft can couple to a gearbox bore, directly or via a bushing."""
    if shaft_mm == bore_mm:
        return True
    if shaft_mm > bore_mm:
        return False
    return find_bushing(shaft_mm, bore_mm, bushings) is not None
