"""Export view models as camelCase JSON."""

from workout_engine.serialization.view_json import to_view_dict, to_view_json

__all__ = ["to_view_dict", "to_view_json"]
