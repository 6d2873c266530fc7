import json
import logging
from typing import List, Optional

from fastapi import HTTPException, status

from krishi_setu.collections.cultivation_guide import save_cultivation_guide
from krishi_setu.core.genai_client import build_structured_chain, genai_http_error
from krishi_setu.core.languages import language_name
from krishi_setu.models.cultivation_guide import (
    CultivationGuide,
    CultivationGuideRequest,
    CultivationGuideView,
    GeneratedCultivationGuide,
    Stage,
    StageStatus,
)
from krishi_setu.prompts.cultivation_guide_system_prompt import (
    CULTIVATION_GUIDE_SYSTEM_PROMPT,
)
from krishi_setu.services.stage_lifecycle import StageProgress

logger = logging.getLogger(__name__)

CROP_VARIETIES = {
    "corn": ["Pioneer P1197", "Dekalb DKC62-08", "Sweet Corn 101"],
    "tomato": ["Roma", "Cherry", "Beefsteak", "San Marzano"],
    "wheat": ["HD-3226", "Durum", "Einkorn"],
    "sugarcane": ["Co 86032", "Co 0238", "Co 0118", "CoJ 64"],
    "jute": ["JRO-524 (Naveen)", "JRC-212", "JRC-321"],
    "cotton": ["MCU-5", "LRA-5166", "Surabhi", "Bt Cotton"],
    "millets": ["Pearl Millet (Bajra)", "Sorghum (Jowar)", "Finger Millet (Ragi)"],
    "pulses": ["Chickpea (Chana)", "Pigeon Pea (Arhar)", "Lentil (Masoor)"],
    "rice": ["Basmati-370", "Pusa Basmati-1", "IR-64", "Sona Masoori"],
    "tea": ["TV1 (Tocklai Vegetable 1)", "P-126", "S.3A/3"],
    "coffee": ["Arabica", "Robusta", "Kent", "S.795"],
    "groundnut": ["Kadiri-6", "TMV-7", "G2"],
    "mustard": ["Pusa Bold", "RH-30", "Varuna"],
    "soybean": ["JS-335", "NRC-37", "MACS-1188"],
    "sunflower": ["KBSH-1", "MSFH-17", "PAC-36"],
}


def suggested_varieties(crop: str) -> List[str]:
    return list(CROP_VARIETIES.get(crop.strip().lower(), []))


def seed_stage_statuses(stages: List[Stage]) -> List[Stage]:
    """Start a fresh guide: first stage active, the rest upcoming, no task checked."""
    return [
        stage.model_copy(
            update={
                "status": StageStatus.ACTIVE if index == 0 else StageStatus.UPCOMING,
                "tasks": [task.model_copy(update={"completed": False}) for task in stage.tasks],
            }
        )
        for index, stage in enumerate(stages)
    ]


def build_guide_view(guide: CultivationGuide, progress: Optional[StageProgress] = None) -> CultivationGuideView:
    progress = progress or StageProgress(guide.stages)
    data = guide.model_dump()
    data["stages"] = progress.stages
    return CultivationGuideView.model_validate(
        {
            **data,
            "active_stage_index": -1 if progress.active_index is None else progress.active_index,
            "is_complete": progress.is_complete,
            "completed_stages": progress.completed_stages,
            "total_stages": len(progress.stages),
            "completed_tasks": progress.completed_tasks,
            "total_tasks": progress.total_tasks,
        }
    )


async def generate_cultivation_guide(
    farmer_id: str,
    request: CultivationGuideRequest,
    language: Optional[str] = None,
) -> CultivationGuide:
    chain = build_structured_chain(GeneratedCultivationGuide)
    input_data = {
        **request.model_dump(exclude_none=True),
        "language": language_name(language),
    }

    try:
        generated: GeneratedCultivationGuide = await chain.ainvoke(
            {
                "system_prompt": CULTIVATION_GUIDE_SYSTEM_PROMPT,
                "input_json": json.dumps(input_data),
            }
        )
    except Exception as e:
        raise genai_http_error(e, "generate the cultivation guide") from e

    if generated is None or not generated.stages:
        logger.warning("Guide generator returned no stages for crop=%s", request.crop)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AI returned no cultivation stages.",
        )

    guide = CultivationGuide(
        farmer_id=farmer_id,
        crop=generated.crop or request.crop,
        variety=generated.variety or request.variety or "",
        area_acres=request.area_acres,
        estimated_duration_days=generated.estimated_duration_days,
        estimated_expenses=generated.estimated_expenses,
        stages=seed_stage_statuses(generated.stages),
    )
    saved = await save_cultivation_guide(guide)
    logger.info(
        "Created cultivation guide %s (%s, %d stages) for farmer %s",
        saved.id,
        saved.crop,
        len(saved.stages),
        farmer_id,
    )
    return saved
