import logging
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class StageStatus(str, Enum):
    """Lifecycle status of a cultivation stage."""

    COMPLETED = "completed"
    ACTIVE = "active"
    UPCOMING = "upcoming"


class Task(BaseModel):
    """A checkable to-do item within a cultivation stage."""

    text: str = Field(description="A description of the task.")
    completed: bool = Field(
        default=False, description="Whether the task has been completed."
    )


def normalize_task(raw: Any) -> Optional[Task]:
    """
    Convert one stored task into a Task.

    Guides generated by older clients store tasks as bare strings, those become
    incomplete tasks. Mappings keep their text, and anything but a literal
    ``True`` for ``completed`` counts as not completed. Returns None for
    entries that cannot be read as a task.
    """
    if isinstance(raw, Task):
        return raw
    if isinstance(raw, str):
        return Task(text=raw)
    if isinstance(raw, dict) and isinstance(raw.get("text"), str):
        return Task(text=raw["text"], completed=raw.get("completed") is True)
    return None


def normalize_tasks(raw_tasks: Any) -> List[Task]:
    if raw_tasks is None:
        return []
    if not isinstance(raw_tasks, (list, tuple)):
        logger.warning("Ignoring task list of unexpected type %s", type(raw_tasks).__name__)
        return []

    tasks: List[Task] = []
    for raw in raw_tasks:
        task = normalize_task(raw)
        if task is None:
            logger.warning("Dropping malformed cultivation task: %r", raw)
            continue
        tasks.append(task)
    return tasks


class Stage(BaseModel):
    """A discrete phase of cultivation with its own instructions and tasks."""

    name: str = Field(
        description='The name of the cultivation stage (e.g., "Planting", "Vegetative Growth").'
    )
    status: StageStatus = Field(
        default=StageStatus.UPCOMING,
        description="The current status of this stage. Set by backend.",
    )
    duration: str = Field(
        description='The estimated duration of this stage (e.g., "Day 1-5").'
    )
    ai_instruction: str = Field(
        description="A detailed, farmer-friendly instruction for this specific stage.",
        validation_alias=AliasChoices("ai_instruction", "aiInstruction"),
    )
    pest_and_disease_alert: Optional[str] = Field(
        default=None,
        description="A specific alert for pests or diseases relevant to this stage and region.",
        validation_alias=AliasChoices("pest_and_disease_alert", "pestAndDiseaseAlert"),
    )
    tasks: List[Task] = Field(
        default_factory=list,
        description="Key tasks to be completed during this stage.",
    )

    @field_validator("tasks", mode="before")
    @classmethod
    def _normalize_tasks(cls, value: Any) -> List[Task]:
        return normalize_tasks(value)


class CultivationGuideRequest(BaseModel):
    """Farmer inputs used to generate a cultivation guide."""

    crop: str = Field(min_length=1, description="The crop to cultivate.")
    variety: Optional[str] = Field(
        default=None, description="Preferred variety, AI picks one if missing."
    )
    area_acres: float = Field(gt=0, description="Area to be cultivated in acres.")
    current_weather: str = Field(
        min_length=1, description="Current weather conditions in the farmer's words."
    )
    soil_health: str = Field(
        min_length=1, description="Soil health details or soil test summary."
    )


class GeneratedCultivationGuide(BaseModel):
    """Structured output expected from the guide generator."""

    crop: str = Field(description="Name of the crop.")
    variety: str = Field(description="Variety of the crop the guide is written for.")
    estimated_duration_days: int = Field(
        ge=0, description="Estimated total duration of cultivation in days."
    )
    estimated_expenses: float = Field(
        ge=0, description="Estimated total expenses in rupees."
    )
    stages: List[Stage] = Field(
        description="Ordered cultivation stages from land preparation to harvest."
    )


class CultivationGuide(BaseModel):
    """A persisted cultivation plan for one crop, owned by one farmer."""

    id: str = Field(
        description="UUID of the cultivation guide.",
        default_factory=lambda: uuid4().hex,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id",
    )
    farmer_id: str = Field(
        description="UUID of the farmer owning this guide.",
        validation_alias=AliasChoices("farmer_id", "userId"),
    )
    crop: str = Field(description="Name of the crop.")
    variety: str = Field(description="Variety of the crop.")
    area_acres: Optional[float] = Field(default=None, description="Cultivated area in acres.")
    estimated_duration_days: int = Field(
        description="Estimated total duration of cultivation in days.",
        validation_alias=AliasChoices("estimated_duration_days", "estimatedDurationDays"),
    )
    estimated_expenses: float = Field(
        description="Estimated total expenses in rupees.",
        validation_alias=AliasChoices("estimated_expenses", "estimatedExpenses"),
    )
    stages: List[Stage] = Field(description="Ordered cultivation stages.")
    created_at: float = Field(default_factory=lambda: datetime.now().timestamp())


class TaskToggleRequest(BaseModel):
    completed: bool


class CultivationGuideView(CultivationGuide):
    """A guide together with its derived progress, computed on read."""

    active_stage_index: int = Field(description="Index of the active stage, -1 if none.")
    is_complete: bool = Field(description="True once every stage is completed.")
    completed_stages: int
    total_stages: int
    completed_tasks: int
    total_tasks: int
