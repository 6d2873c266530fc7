"""
Stage lifecycle for cultivation guides.

A guide's stages form a fixed linear progression. Each stage moves
``upcoming -> active -> completed`` and at most one stage is active at a time.
Nothing here performs I/O: callers load the stored stages, apply one
operation and persist the returned list.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from krishi_setu.models.cultivation_guide import Stage, StageStatus

logger = logging.getLogger(__name__)


class StageLifecycleError(ValueError):
    """Base class for rejected stage lifecycle operations."""


class TaskIndexError(StageLifecycleError, IndexError):
    """A stage or task index does not exist in the guide."""


class StageNotActiveError(StageLifecycleError):
    """Tasks can only be edited while their stage is active."""


class MultipleActiveStagesError(StageLifecycleError):
    """The stage list has more than one active stage."""


def _find_active_index(stages: Sequence[Stage]) -> Optional[int]:
    active = [i for i, stage in enumerate(stages) if stage.status == StageStatus.ACTIVE]
    if len(active) > 1:
        raise MultipleActiveStagesError(
            f"Expected at most one active stage, found {len(active)} at positions {active}."
        )
    return active[0] if active else None


def _check_index(index: int, size: int, label: str) -> None:
    if not 0 <= index < size:
        raise TaskIndexError(f"{label} index {index} is out of range (0..{size - 1}).")


class StageProgress:
    """
    An ordered, immutable stage list paired with the index of its active stage.

    The active index is computed once when the stages are loaded and then
    carried forward by :meth:`advance`, so operations never rescan statuses.
    Every operation returns a new ``StageProgress``; stages and tasks of the
    original are never modified.
    """

    __slots__ = ("_stages", "_active_index")

    def __init__(self, stages: Iterable[Stage]):
        self._stages: Tuple[Stage, ...] = tuple(stages)
        self._active_index: Optional[int] = _find_active_index(self._stages)

    @classmethod
    def _with_active(
        cls, stages: Tuple[Stage, ...], active_index: Optional[int]
    ) -> "StageProgress":
        progress = cls.__new__(cls)
        progress._stages = stages
        progress._active_index = active_index
        return progress

    @property
    def stages(self) -> List[Stage]:
        return list(self._stages)

    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    @property
    def is_complete(self) -> bool:
        return all(stage.status == StageStatus.COMPLETED for stage in self._stages)

    @property
    def completed_stages(self) -> int:
        return sum(1 for stage in self._stages if stage.status == StageStatus.COMPLETED)

    @property
    def total_tasks(self) -> int:
        return sum(len(stage.tasks) for stage in self._stages)

    @property
    def completed_tasks(self) -> int:
        return sum(1 for stage in self._stages for task in stage.tasks if task.completed)

    def toggle_task(self, stage_index: int, task_index: int, completed: bool) -> "StageProgress":
        """Set one task's ``completed`` flag. Stage statuses are not recomputed."""
        _check_index(stage_index, len(self._stages), "Stage")
        stage = self._stages[stage_index]
        _check_index(task_index, len(stage.tasks), "Task")
        if stage_index != self._active_index:
            raise StageNotActiveError(
                f"Stage '{stage.name}' is {stage.status.value}; only the active stage's tasks can change."
            )

        tasks = list(stage.tasks)
        tasks[task_index] = tasks[task_index].model_copy(update={"completed": completed})
        stages = list(self._stages)
        stages[stage_index] = stage.model_copy(update={"tasks": tasks})
        return self._with_active(tuple(stages), self._active_index)

    def advance(self) -> "StageProgress":
        """
        Complete the active stage and activate the next one.

        Unchecked tasks of the completed stage are checked off. With no active
        stage (every stage done, or none ever activated) this is a no-op.
        """
        current = self._active_index
        if current is None:
            logger.debug("advance called without an active stage; nothing to do")
            return self

        stages = list(self._stages)
        finished = stages[current]
        stages[current] = finished.model_copy(
            update={
                "status": StageStatus.COMPLETED,
                "tasks": [task.model_copy(update={"completed": True}) for task in finished.tasks],
            }
        )

        next_index: Optional[int] = current + 1
        if next_index < len(stages):
            stages[next_index] = stages[next_index].model_copy(
                update={"status": StageStatus.ACTIVE}
            )
        else:
            next_index = None
        return self._with_active(tuple(stages), next_index)


def toggle_task(
    stages: Sequence[Stage], stage_index: int, task_index: int, completed: bool
) -> List[Stage]:
    return StageProgress(stages).toggle_task(stage_index, task_index, completed).stages


def advance(stages: Sequence[Stage]) -> List[Stage]:
    return StageProgress(stages).advance().stages


def active_stage_index(stages: Sequence[Stage]) -> int:
    index = StageProgress(stages).active_index
    return -1 if index is None else index


def is_complete(stages: Sequence[Stage]) -> bool:
    return all(stage.status == StageStatus.COMPLETED for stage in stages)
