from typing import Any, Dict, Optional

import requests

from icar.config import Settings, get_settings
from icar.models.route import Coordinate, Route, RouteSummary
from icar.utils.errors import RouteError
from icar.utils.geo import decode_polyline
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)

DIRECTIONS_PATH = "/v2/directions/driving-car"
ORS_ACCEPT = "application/json, application/geo+json, application/gpx+xml, img/png; charset=utf-8"


class OpenRouteServiceClient:
    """
    Driving directions from OpenRouteService.

    The route geometry comes back as an encoded polyline and is decoded
    into coordinates ready to draw.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def get_directions(self, start: Coordinate, end: Coordinate) -> Route:
        if not self.settings.ors_api_key:
            raise RouteError("Routing API key not configured (ORS_API_KEY).")

        body = {"coordinates": [start.as_lon_lat(), end.as_lon_lat()]}
        headers = {
            "Authorization": self.settings.ors_api_key,
            "Accept": ORS_ACCEPT,
            "Content-Type": "application/json",
        }
        try:
            response = self.session.post(
                f"{self.settings.ors_base_url}{DIRECTIONS_PATH}",
                json=body,
                headers=headers,
                timeout=self.settings.request_timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to get directions: {e}")
            raise RouteError("Failed to get directions.")

        if response.status_code != 200:
            logger.error(f"ORS API error: {data}")
            raise RouteError(self._error_message(data))

        return self.parse_route(data)

    @staticmethod
    def _error_message(data: Any) -> str:
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if message:
                return message
        return "Could not get route."

    @staticmethod
    def parse_route(data: Dict[str, Any]) -> Route:
        routes = data.get("routes") if isinstance(data, dict) else None
        first = routes[0] if routes else None
        if not first or not first.get("geometry"):
            logger.error(f"ORS API response missing route geometry: {data}")
            raise RouteError("Could not find a route to this mechanic.")

        try:
            coordinates = decode_polyline(first["geometry"])
        except ValueError as e:
            logger.error(f"Undecodable route geometry: {e}")
            raise RouteError("Could not find a route to this mechanic.")

        summary = first.get("summary")
        return Route(
            coordinates=coordinates,
            summary=RouteSummary(
                distance=summary.get("distance", 0),
                duration=summary.get("duration", 0),
            ) if summary else None,
        )
