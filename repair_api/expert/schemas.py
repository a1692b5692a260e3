"""Pydantic schemas for the structured repair guide."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Whatever the coercer could recover from the model reply. No shape guarantees.
LooseRecord = Union[Dict[str, Any], List[Any]]

NO_OVERVIEW = "No overview available"
NOT_AVAILABLE = "N/A"


class RepairGuide(BaseModel):
    """Schema-complete repair guide built from an LLM reply.

    Every field always holds a value of the declared type; the normalizer
    substitutes the defaults below for anything missing or mistyped.
    """

    model_config = ConfigDict(frozen=True)

    overview: str = Field(default=NO_OVERVIEW, description="Plain-language summary of the problem")
    diagnostic_steps: List[str] = Field(default_factory=list, description="Ordered checks to confirm the fault")
    repair_steps: List[str] = Field(default_factory=list, description="Ordered repair instructions")
    tools_needed: List[str] = Field(default_factory=list)
    time_estimate: str = Field(default=NOT_AVAILABLE)
    cost_estimate: str = Field(default=NOT_AVAILABLE)
    parts: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    recommended_repairs: List[str] = Field(default_factory=list)


class VehicleDescription(BaseModel):
    """What the user told us about the vehicle and the problem."""

    year: Optional[str] = Field(None, description="Model year, e.g. 2014")
    make: Optional[str] = Field(None, description="Vehicle make, e.g. Honda")
    model: Optional[str] = Field(None, description="Vehicle model, e.g. Civic")
    part: Optional[str] = Field(None, description="Part the user suspects or wants to replace")
    code: Optional[str] = Field(None, description="OBD-II trouble code, e.g. P0420")
    notes: Optional[str] = Field(None, description="Free-text symptoms and context")

    @field_validator("year", "make", "model", "part", "code", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty form fields the same as missing ones."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def vehicle_label(self) -> str:
        """Year, make and model joined by spaces, skipping the blanks."""
        return " ".join(p for p in (self.year, self.make, self.model) if p)
