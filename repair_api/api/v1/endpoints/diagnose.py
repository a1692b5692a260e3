from functools import lru_cache

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
import structlog

from repair_api.api.v1.schemas import DiagnoseRequest, DiagnoseResponse, ErrorResponse
from repair_api.expert.client import RepairLLMClient
from repair_api.services.diagnosis import DiagnosisService

logger = structlog.get_logger()
router = APIRouter()


# One client (and connection pool) per process
@lru_cache(maxsize=1)
def get_llm_client() -> RepairLLMClient:
    return RepairLLMClient()


# Dependency for the service
def get_diagnosis_service(
    llm_client: RepairLLMClient = Depends(get_llm_client),
) -> DiagnosisService:
    return DiagnosisService(llm_client)


@router.post(
    "/diagnose",
    response_model=DiagnoseResponse,
    responses={500: {"model": ErrorResponse}},
)
async def create_diagnosis(
    request: DiagnoseRequest,
    service: DiagnosisService = Depends(get_diagnosis_service),
):
    """
    Generate a step-by-step repair guide.

    1. **Prompts the model** with the vehicle, part, code and notes.
    2. **Normalizes the reply** into the fixed guide structure.
    3. **Adds search links** for tutorial videos and parts retailers.
    """
    try:
        return await service.run_diagnosis(request)
    except Exception as e:
        logger.error("diagnosis_endpoint_error", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(e) or "Unknown error").model_dump(),
        )
