import structlog
from fastapi import APIRouter

from repair_api.api.v1.schemas import NormalizeRequest
from repair_api.expert.coerce import coerce_to_json_object
from repair_api.expert.normalize import normalize_to_schema
from repair_api.expert.schemas import NO_OVERVIEW, RepairGuide

logger = structlog.get_logger()

router = APIRouter()


@router.post("/normalize", response_model=RepairGuide)
def normalize_reply(request: NormalizeRequest):
    """
    Tool: Turn a raw model reply into a complete repair guide.
    Useful for replaying stored replies without calling the model.
    """
    guide = normalize_to_schema(coerce_to_json_object(request.text))
    logger.info(
        "normalize_performed",
        input_length=len(request.text),
        has_overview=guide.overview != NO_OVERVIEW,
    )
    return guide
