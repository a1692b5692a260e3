from .schemas import RepairGuide, VehicleDescription
from .coerce import coerce_to_json_object
from .normalize import normalize_to_schema
from .client import RepairLLMClient

__all__ = [
    "RepairGuide",
    "VehicleDescription",
    "coerce_to_json_object",
    "normalize_to_schema",
    "RepairLLMClient",
]
