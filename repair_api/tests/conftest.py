"""Shared pytest fixtures for repair_api tests."""

from __future__ import annotations

from typing import Any, Dict

import pytest

from repair_api.expert.schemas import VehicleDescription


@pytest.fixture()
def complete_guide_dict() -> Dict[str, Any]:
    """A reply that already matches the guide schema exactly."""
    return {
        "overview": "P0420 means the catalytic converter is below efficiency threshold.",
        "diagnostic_steps": [
            "Read freeze frame data",
            "Compare upstream and downstream O2 sensor voltages",
            "Check for exhaust leaks ahead of the downstream sensor",
        ],
        "repair_steps": [
            "Fix any exhaust leaks",
            "Replace the downstream O2 sensor if it is lazy",
            "Replace the catalytic converter",
        ],
        "tools_needed": ["OBD-II scanner", "O2 sensor socket", "Jack stands"],
        "time_estimate": "1-3 hours",
        "cost_estimate": "$100-$1,500",
        "parts": ["Downstream O2 sensor", "Catalytic converter"],
        "videos": ["P0420 explained"],
        "recommended_repairs": ["Replace downstream O2 sensor"],
    }


@pytest.fixture()
def civic_request() -> VehicleDescription:
    return VehicleDescription(
        year="2014",
        make="Honda",
        model="Civic",
        part="O2 sensor",
        code="P0420",
        notes="Check engine light on, slight rattle",
    )
