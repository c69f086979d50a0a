"""Exception hierarchy.

The geometry core never raises for its boundary cases; everything here
belongs to collaborators (hazard data files, geocoding, routing) and carries
a message fit to show the person asking for directions.
"""
from __future__ import annotations

from typing import Optional


class SafeRouteError(Exception):
    user_message = "Something went wrong. Please try again."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)
        self.detail = detail or self.user_message


class HazardDataError(SafeRouteError):
    user_message = "Hazard data could not be loaded."


class MissingDestinationError(SafeRouteError):
    user_message = "Please enter a destination"


class GeocodingError(SafeRouteError):
    user_message = "Location lookup failed. Please try again."


class DestinationNotFoundError(GeocodingError):
    user_message = "Destination not found. Please try a different address."


class StartNotFoundError(GeocodingError):
    user_message = "Start location not found. Please use your current location."


class StartUnavailableError(SafeRouteError):
    user_message = "Please enable location services or enter a start location."


class RoutingError(SafeRouteError):
    user_message = "Unable to calculate route. Please try different locations."


class RouteFileError(SafeRouteError):
    user_message = "Route file could not be read. Expected a JSON list of points."
