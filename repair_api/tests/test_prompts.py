"""Tests for repair_api.expert.prompts."""

from repair_api.expert.prompts import (
    SECTION_TRAILER,
    SYSTEM_PROMPT,
    build_parts_prompt,
    build_user_prompt,
)
from repair_api.expert.schemas import RepairGuide, VehicleDescription


def test_system_prompt_lists_every_field():
    for name in RepairGuide.model_fields:
        assert f'"{name}"' in SYSTEM_PROMPT


def test_user_prompt_full(civic_request):
    prompt = build_user_prompt(civic_request)
    lines = prompt.split("\n")
    assert lines[:4] == [
        "Vehicle: 2014 Honda Civic",
        "Part: O2 sensor",
        "OBD-II Code: P0420",
        "Notes: Check engine light on, slight rattle",
    ]
    assert prompt.endswith(SECTION_TRAILER)


def test_user_prompt_skips_missing_inputs():
    prompt = build_user_prompt(VehicleDescription(code="P0300"))
    assert prompt.startswith("OBD-II Code: P0300\n")
    assert "Vehicle:" not in prompt
    assert "Part:" not in prompt
    assert "Notes:" not in prompt


def test_user_prompt_with_nothing_is_only_trailer():
    assert build_user_prompt(VehicleDescription()) == SECTION_TRAILER


def test_parts_prompt(civic_request):
    prompt = build_parts_prompt(civic_request)
    assert "OBD-II code P0420 in 2014 Honda Civic" in prompt
    assert "comma-separated" in prompt
