"""Prompts for the repair guide model."""

from repair_api.expert.schemas import VehicleDescription

SYSTEM_PROMPT = """You are obuddy5000, a professional auto mechanic assistant.
Teach absolute beginners step by step.
Always return valid JSON with this schema:
{
  "overview": string,
  "diagnostic_steps": string[],
  "repair_steps": string[],
  "tools_needed": string[],
  "time_estimate": string,
  "cost_estimate": string,
  "parts": string[],
  "videos": string[],
  "recommended_repairs": string[]
}"""

SECTION_TRAILER = (
    "Please provide the response formatted as:\n"
    "📝 Overview\n🔍 Diagnostic Steps\n🛠 Repair Steps\n🔧 Tools Needed\n"
    "⏱ Estimated Time\n💰 Estimated Cost"
)

PARTS_PROMPT_TEMPLATE = (
    "List the top 3 most likely parts/components that could cause OBD-II code "
    "{code} in {year} {make} {model}. Provide only a comma-separated list, "
    "prioritize common parts."
)


def build_user_prompt(request: VehicleDescription) -> str:
    """One line per supplied input, followed by the section trailer."""
    vehicle = request.vehicle_label()
    lines = [
        f"Vehicle: {vehicle}" if vehicle else "",
        f"Part: {request.part}" if request.part else "",
        f"OBD-II Code: {request.code}" if request.code else "",
        f"Notes: {request.notes}" if request.notes else "",
        SECTION_TRAILER,
    ]
    return "\n".join(line for line in lines if line)


def build_parts_prompt(request: VehicleDescription) -> str:
    return PARTS_PROMPT_TEMPLATE.format(
        code=request.code or "",
        year=request.year or "",
        make=request.make or "",
        model=request.model or "",
    )
