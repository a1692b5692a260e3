"""Decorates a normalized guide for display in the web form."""

from typing import Any, Dict, Sequence

from repair_api.expert.schemas import NO_OVERVIEW, NOT_AVAILABLE, RepairGuide


def _prefixed(prefix: str, items: Sequence[str]):
    return [f"{prefix} {item}" for item in items]


def decorate(
    guide: RepairGuide,
    parts_links: Sequence[str],
    video_links: Sequence[str],
) -> Dict[str, Any]:
    """Add section headings and bullet emoji to each field.

    ``parts`` and ``videos`` are replaced by the synthesized search links;
    the model's own suggestions for those fields are not shown.
    """
    return {
        "overview": f"📝 Overview\n{guide.overview or NO_OVERVIEW}",
        "diagnostic_steps": _prefixed("🔍", guide.diagnostic_steps),
        "repair_steps": _prefixed("🛠", guide.repair_steps),
        "tools_needed": _prefixed("🔧", guide.tools_needed),
        "time_estimate": f"⏱ Estimated Time\n{guide.time_estimate or NOT_AVAILABLE}",
        "cost_estimate": f"💰 Estimated Cost\n{guide.cost_estimate or NOT_AVAILABLE}",
        "parts": list(parts_links),
        "videos": list(video_links),
        "recommended_repairs": list(guide.recommended_repairs),
    }
