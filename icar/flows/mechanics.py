from typing import List, Optional

import pydantic

from icar.apis.user_api import UserService
from icar.models.irepair import IrepairUser, Mechanic
from icar.models.route import Coordinate, Route
from icar.plugin.openroute import OpenRouteServiceClient
from icar.utils.errors import ApiError, RouteError
from icar.utils.geo import distance_between
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)


class MechanicsFinder:
    """Nearby garages: list, distances from the user, nearest one and directions."""

    def __init__(self, user_service: UserService, router: Optional[OpenRouteServiceClient] = None):
        self.user_service = user_service
        self.router = router
        self.mechanics: List[Mechanic] = []
        self.user_location: Optional[Coordinate] = None
        self.nearest: Optional[Mechanic] = None
        self.selected: Optional[Mechanic] = None
        self.route: Optional[Route] = None

    def load(self) -> List[Mechanic]:
        response = self.user_service.get_all_irepairs()
        if not response.success or not isinstance(response.data, list):
            logger.error(f"Failed to fetch mechanics: {response.error}")
            raise ApiError("Failed to load mechanics. Please try again.", status_code=response.status_code)

        mechanics = []
        for item in response.data:
            try:
                mechanic = Mechanic.from_irepair(IrepairUser.model_validate(item))
            except pydantic.ValidationError as e:
                logger.warning(f"Skipping malformed garage record: {e}")
                continue
            if mechanic is None:
                logger.debug(f"Skipping garage without location: {item.get('_id')}")
                continue
            mechanics.append(mechanic)
        self.mechanics = mechanics
        if self.user_location:
            self.update_distances()
        return self.mechanics

    def set_user_location(self, latitude: float, longitude: float) -> None:
        self.user_location = Coordinate(latitude=latitude, longitude=longitude)
        self.update_distances()

    def update_distances(self) -> Optional[Mechanic]:
        """Recompute distances from the user and track the nearest garage."""
        if not self.user_location or not self.mechanics:
            self.nearest = None
            return None
        for mechanic in self.mechanics:
            mechanic.distance_km = distance_between(self.user_location, mechanic.coordinates)
        self.nearest = min(self.mechanics, key=lambda m: m.distance_km)
        return self.nearest

    def sorted_by_distance(self) -> List[Mechanic]:
        if not self.user_location:
            return list(self.mechanics)
        return sorted(self.mechanics, key=lambda m: m.distance_km if m.distance_km is not None else float("inf"))

    def find(self, mechanic_id: str) -> Mechanic:
        for mechanic in self.mechanics:
            if mechanic.id == mechanic_id:
                return mechanic
        raise ApiError(f"Mechanic {mechanic_id} not found", status_code=404)

    def get_directions(self, mechanic_id: str) -> Route:
        """Route from the user to a garage; clears any previous route first."""
        self.selected = self.find(mechanic_id)
        self.route = None
        if not self.user_location:
            raise RouteError("User location not available.")
        if self.router is None:
            raise RouteError("Routing is not configured.")
        self.route = self.router.get_directions(self.user_location, self.selected.coordinates)
        return self.route
