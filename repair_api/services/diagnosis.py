import structlog

from repair_api.api.v1.schemas import DiagnoseRequest, DiagnoseResponse
from repair_api.config import settings
from repair_api.expert import prompts
from repair_api.expert.client import RepairLLMClient
from repair_api.expert.coerce import coerce_to_json_object
from repair_api.expert.normalize import normalize_to_schema
from repair_api.services import links
from repair_api.services.presentation import decorate

logger = structlog.get_logger()


class DiagnosisService:
    def __init__(self, llm_client: RepairLLMClient):
        self.llm_client = llm_client

    async def run_diagnosis(self, request: DiagnoseRequest) -> DiagnoseResponse:
        """
        Execute the full guide pipeline:
        1. Prompt the model
        2. Coerce and normalize its reply
        3. Suggest parts (only when a trouble code is given)
        4. Build video/store links and decorate the guide
        """
        logger.info(
            "diagnosis_pipeline_start",
            vehicle=request.vehicle_label() or None,
            code=request.code,
            part=request.part,
        )

        # 1. Model call
        user_prompt = prompts.build_user_prompt(request)
        raw_text = await self.llm_client.generate_guide(user_prompt, model=request.llm_model)

        # 2. Structure
        guide = normalize_to_schema(coerce_to_json_object(raw_text))

        # 3. Parts
        suggested = []
        if settings.suggest_parts and request.code:
            suggested = await self.llm_client.suggest_parts(request, model=request.llm_model)
        candidates = links.parts_candidates(request, suggested)

        # 4. Presentation
        data = decorate(
            guide,
            parts_links=links.parts_store_links(request, candidates),
            video_links=links.video_search_links(request, limit=settings.max_video_links),
        )

        logger.info(
            "diagnosis_pipeline_complete",
            diagnostic_steps=len(guide.diagnostic_steps),
            repair_steps=len(guide.repair_steps),
            parts_candidates=len(candidates),
        )
        return DiagnoseResponse(data=data, raw=raw_text)
