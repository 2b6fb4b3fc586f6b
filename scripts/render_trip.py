import argparse
import json
import logging
import os

import pandas as pd

from eld.daily_view import build_daily_views
from eld.export import grid_to_dataframe
from geocoding.fallback import fallback_coordinates
from geocoding.geocode_client import GeocodeClient
from geocoding.policy import default_resolver_policy
from mapping.route_builder import RouteUnavailable, build_route
from mapping.trip_map import build_trip_map
from trips.models import TripResult


def load_trip(filepath="sampledata/trip_result.json") -> TripResult:
    # Resolve the correct path depending on where the user runs the script from.
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    absolute_path = filepath if os.path.isabs(filepath) else os.path.join(base_dir, filepath)

    with open(absolute_path, 'r') as file:
        return TripResult.from_dict(json.load(file))


def offline_route(trip: TripResult):
    """Fallback-only geometry, for running without a backend."""
    return build_route(
        fallback_coordinates(trip.current_location),
        fallback_coordinates(trip.pickup_location),
        fallback_coordinates(trip.dropoff_location),
        trip.segments,
        labels=(trip.current_location, trip.pickup_location, trip.dropoff_location),
    )


def render(trip: TripResult, online: bool):
    print(f"=== TRIP {trip.id}: {trip.current_location} -> {trip.pickup_location} -> {trip.dropoff_location} ===")
    print(f"{trip.total_distance:.1f} miles, {trip.total_duration:.1f}h driving, "
          f"{trip.fuel_stops} fuel stop(s), {trip.required_rest_stops} rest period(s)\n")

    if online:
        policy = default_resolver_policy()
        route = build_trip_map(GeocodeClient.from_policy(policy), trip, policy=policy)
    else:
        route = offline_route(trip)

    if isinstance(route, RouteUnavailable):
        print(route.reason)
    else:
        print("--- Map Markers ---")
        for marker in route.markers:
            lat, lon = marker.position
            note = " (approximate)" if marker.approximate else ""
            print(f"  [{marker.key}] {marker.title}: {marker.subtitle} @ {lat:.4f}, {lon:.4f}{note}")
        print()

    with pd.option_context("display.width", 200, "display.max_columns", 30):
        for view in build_daily_views(trip.daily_logs):
            print(f"--- {view.title} ({view.total_miles:g} mi) ---")
            frame = grid_to_dataframe(view.grid).replace({True: "#", False: "."})
            print(frame.to_string())
            totals = ", ".join(f"{status.value}: {hours:g}h" for status, hours in view.totals.items())
            print(f"Totals: {totals}\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print map markers and ELD grids for a trip result JSON file.")
    parser.add_argument("path", nargs="?", default="sampledata/trip_result.json")
    parser.add_argument("--online", action="store_true", help="geocode trip points via API_BASE_URL")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    render(load_trip(args.path), online=args.online)
