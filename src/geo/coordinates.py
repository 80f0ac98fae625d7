from __future__ import annotations

from dataclasses import dataclass

from shared.constants import DEFAULT_THRESHOLD_SQUARED


@dataclass(frozen=True)
class Coordinates:
    """
    Geographic position as a (latitude, longitude) pair.

    Planar computations treat longitude as x and latitude as y.
    """

    latitude: float
    longitude: float

    def distance_squared(self, other: Coordinates) -> float:
        dlat = self.latitude - other.latitude
        dlon = self.longitude - other.longitude
        return dlat * dlat + dlon * dlon

    def almost_equals(
        self,
        other: Coordinates,
        threshold_squared: float = DEFAULT_THRESHOLD_SQUARED,
    ) -> bool:
        """True when the squared planar distance is within the threshold."""
        return self.distance_squared(other) <= threshold_squared

    def rounded(self, digits: int) -> Coordinates:
        return Coordinates(round(self.latitude, digits), round(self.longitude, digits))

    def to_xy(self) -> tuple[float, float]:
        return self.longitude, self.latitude
