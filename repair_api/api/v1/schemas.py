from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repair_api.expert.schemas import VehicleDescription


class DiagnoseRequest(VehicleDescription):
    """
    Request payload posted by the diagnose form.
    """

    model_config = ConfigDict(populate_by_name=True)

    provider: Optional[str] = Field(None, description="Provider picked in the form (informational)")
    llm_model: Optional[str] = Field(
        None,
        alias="modelName",
        description="Override for the configured LLM model",
    )

    @field_validator("provider", "llm_model", mode="before")
    @classmethod
    def blank_choice_to_none(cls, v: Any) -> Any:
        """An unset dropdown posts an empty string."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class DiagnoseResponse(BaseModel):
    """
    Success envelope: the decorated guide plus the model's raw reply.
    """

    ok: Literal[True] = True
    data: Dict[str, Any]
    raw: str


class ErrorResponse(BaseModel):
    ok: Literal[False] = False
    error: str


class NormalizeRequest(BaseModel):
    text: str = Field(..., description="Raw model reply to coerce and normalize")
