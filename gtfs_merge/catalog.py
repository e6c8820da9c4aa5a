"""Recognized GTFS tables and the identifier columns used to deduplicate them.

An empty tuple means the table has no natural key: every row is kept.
Iteration order is the literal order below, so output files are always
produced in the same sequence.
"""
from types import MappingProxyType

PRIMARY_ID_FIELDS = MappingProxyType({
    "agency.txt": ("agency_id",),
    "routes.txt": ("route_id",),
    "trips.txt": ("trip_id",),
    "stop_times.txt": ("trip_id", "stop_sequence"),
    "stops.txt": ("stop_id",),
    "calendar.txt": ("service_id",),
    "calendar_dates.txt": ("service_id", "date"),
    "levels.txt": ("level_id",),
    "feed_info.txt": (),
    "shapes.txt": ("shape_id", "shape_pt_sequence"),
    "frequencies.txt": ("trip_id", "start_time"),
    "translations.txt": (
        "table_name",
        "field_name",
        "language",
        "record_id",
        "record_sub_id",
        "field_value",
    ),
})


def table_names() -> list[str]:
    return list(PRIMARY_ID_FIELDS.keys())


def id_fields_for(table_name: str) -> tuple[str, ...]:
    """Identifier columns for `table_name`; unknown tables get no key."""
    return PRIMARY_ID_FIELDS.get(table_name, ())
