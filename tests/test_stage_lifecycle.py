"""
Tests for the cultivation guide stage lifecycle.

Covers:
- advance: mid-list, last stage, terminal no-op, auto-completing tasks
- toggle_task: single-field change, value semantics, index and status errors
- derived queries and StageProgress counters
"""

import pytest

from krishi_setu.models.cultivation_guide import Stage, StageStatus, Task
from krishi_setu.services.stage_lifecycle import (
    MultipleActiveStagesError,
    StageNotActiveError,
    StageProgress,
    TaskIndexError,
    active_stage_index,
    advance,
    is_complete,
    toggle_task,
)


def _statuses(stages):
    return [stage.status for stage in stages]


class TestAdvance:
    def test_advance_completes_active_and_activates_next(self, three_stages):
        result = advance(three_stages)

        assert _statuses(result) == [
            StageStatus.COMPLETED,
            StageStatus.ACTIVE,
            StageStatus.UPCOMING,
        ]
        assert all(task.completed for task in result[0].tasks)
        # Tasks of the newly active stage are left as they were
        assert result[1].tasks == three_stages[1].tasks
        assert result[2] == three_stages[2]

    def test_advance_from_last_stage_reaches_terminal_state(self, make_stage):
        stages = [
            make_stage("A", StageStatus.COMPLETED, [("a", True)]),
            make_stage("B", StageStatus.ACTIVE, [("b", False)]),
        ]

        result = advance(stages)

        assert _statuses(result) == [StageStatus.COMPLETED, StageStatus.COMPLETED]
        assert active_stage_index(result) == -1
        assert is_complete(result)

    def test_advance_is_noop_once_complete(self, make_stage):
        stages = [make_stage("A", StageStatus.COMPLETED, [("a", True)])]

        once = advance(stages)
        twice = advance(once)

        assert once == stages
        assert twice == stages

    def test_advance_without_active_stage_is_noop(self, make_stage):
        stages = [make_stage("A", StageStatus.UPCOMING), make_stage("B", StageStatus.UPCOMING)]

        assert advance(stages) == stages

    def test_advance_does_not_mutate_input(self, three_stages):
        before = [stage.model_copy(deep=True) for stage in three_stages]

        advance(three_stages)

        assert three_stages == before

    def test_never_skips_or_duplicates_active(self, three_stages):
        stages = three_stages
        seen = []
        for _ in range(5):
            seen.append(active_stage_index(stages))
            stages = advance(stages)
            assert _statuses(stages).count(StageStatus.ACTIVE) <= 1

        assert seen == [0, 1, 2, -1, -1]

    def test_worked_example_two_stages(self):
        stages = [
            Stage.model_validate(
                {
                    "name": "Prepare",
                    "status": "active",
                    "duration": "Day 1-3",
                    "aiInstruction": "Prepare the field",
                    "tasks": [{"text": "Till soil", "completed": False}],
                }
            ),
            Stage.model_validate(
                {
                    "name": "Sow",
                    "status": "upcoming",
                    "duration": "Day 4-6",
                    "aiInstruction": "Sow the seeds",
                    "tasks": [{"text": "Plant seeds", "completed": False}],
                }
            ),
        ]

        result = advance(stages)

        assert result[0].status == StageStatus.COMPLETED
        assert result[0].tasks == [Task(text="Till soil", completed=True)]
        assert result[1].status == StageStatus.ACTIVE
        assert result[1].tasks == [Task(text="Plant seeds", completed=False)]

    def test_worked_example_single_stage_without_tasks(self, make_stage):
        stages = [make_stage("Only", StageStatus.ACTIVE)]

        result = advance(stages)

        assert _statuses(result) == [StageStatus.COMPLETED]
        assert result[0].tasks == []
        assert advance(result) == result


class TestToggleTask:
    def test_toggle_changes_only_the_addressed_task(self, three_stages):
        result = toggle_task(three_stages, 0, 0, True)

        assert result[0].tasks[0].completed is True
        assert result[0].tasks[1] == three_stages[0].tasks[1]
        assert result[0].status == StageStatus.ACTIVE
        assert result[1:] == three_stages[1:]
        # Untouched stages keep their identity
        assert result[1] is three_stages[1]
        assert result[2] is three_stages[2]

    def test_toggle_leaves_input_untouched(self, three_stages):
        toggle_task(three_stages, 0, 0, True)

        assert three_stages[0].tasks[0].completed is False

    def test_toggle_can_uncheck(self, three_stages):
        result = toggle_task(three_stages, 0, 1, False)

        assert result[0].tasks[1].completed is False

    def test_checking_every_task_does_not_advance(self, three_stages):
        result = toggle_task(three_stages, 0, 0, True)

        assert all(task.completed for task in result[0].tasks)
        assert active_stage_index(result) == 0

    @pytest.mark.parametrize(
        "stage_index,task_index",
        [(3, 0), (-1, 0), (0, 2), (0, -1), (1, 5)],
    )
    def test_out_of_range_indices_raise(self, three_stages, stage_index, task_index):
        with pytest.raises(TaskIndexError):
            toggle_task(three_stages, stage_index, task_index, True)

    def test_task_index_error_is_an_index_error(self, three_stages):
        with pytest.raises(IndexError):
            toggle_task(three_stages, 9, 0, True)

    def test_upcoming_stage_tasks_are_read_only(self, three_stages):
        with pytest.raises(StageNotActiveError):
            toggle_task(three_stages, 1, 0, True)

    def test_completed_stage_tasks_are_read_only(self, three_stages):
        advanced = advance(three_stages)

        with pytest.raises(StageNotActiveError):
            toggle_task(advanced, 0, 0, False)


class TestStageProgress:
    def test_active_index_follows_advance(self, three_stages):
        progress = StageProgress(three_stages)
        assert progress.active_index == 0

        progress = progress.advance()
        assert progress.active_index == 1

        progress = progress.advance().advance()
        assert progress.active_index is None
        assert progress.is_complete

    def test_advance_returns_same_object_when_terminal(self, make_stage):
        progress = StageProgress([make_stage("A", StageStatus.COMPLETED)])

        assert progress.advance() is progress

    def test_counters(self, three_stages):
        progress = StageProgress(three_stages)

        assert progress.completed_stages == 0
        assert progress.total_tasks == 4
        assert progress.completed_tasks == 1

        progress = progress.advance()
        assert progress.completed_stages == 1
        assert progress.completed_tasks == 2

    def test_multiple_active_stages_rejected(self, make_stage):
        stages = [make_stage("A", StageStatus.ACTIVE), make_stage("B", StageStatus.ACTIVE)]

        with pytest.raises(MultipleActiveStagesError):
            StageProgress(stages)

    def test_stages_property_returns_a_copy_of_the_list(self, three_stages):
        progress = StageProgress(three_stages)

        progress.stages.pop()

        assert len(progress.stages) == 3


class TestQueries:
    def test_active_stage_index(self, three_stages, make_stage):
        assert active_stage_index(three_stages) == 0
        assert active_stage_index([make_stage("A", StageStatus.UPCOMING)]) == -1

    def test_is_complete(self, three_stages, make_stage):
        assert not is_complete(three_stages)
        assert is_complete([make_stage("A", StageStatus.COMPLETED)])
