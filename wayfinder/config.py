"""Configuration settings for Wayfinder."""

CONFIG = {
    "route_deviation_threshold": 3.0,  # meters - off path beyond this distance from the route
    "direction_strategy": "turn_distance",  # turn_distance | turn_only | cardinal
    "distance_unit": "m",
    "position_poll_interval": 0.2,  # seconds between live position samples
    # Bundled demo layout (parking structure)
    "demo_layout": "parking_garage.json",
    "demo_start": "P4",
    "demo_destination": "P15",
}
