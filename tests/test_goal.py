import pytest

from mentorme.models.base import ValidationError
from mentorme.models.goal import Goal, GoalCategory, GoalStatus
from mentorme.models.milestone import Milestone


def make_goal(**kwargs):
    kwargs.setdefault("title", "Run a half marathon")
    kwargs.setdefault("description", "")
    kwargs.setdefault("category", GoalCategory.FITNESS)
    return Goal(**kwargs)


def test_is_active_follows_status():
    assert make_goal().is_active is True
    assert make_goal(status=GoalStatus.COMPLETED).is_active is False


def test_copy_with_resyncs_is_active():
    goal = make_goal().copy_with(status=GoalStatus.ABANDONED)
    assert goal.is_active is False
    assert goal.copy_with(status=GoalStatus.ACTIVE).is_active is True


def test_copy_with_keeps_identity():
    goal = make_goal()
    with pytest.raises(TypeError):
        goal.copy_with(id="x")
    assert goal.copy_with(title="Run a full marathon").id == goal.id


def test_progress_bounds():
    with pytest.raises(ValidationError):
        make_goal(current_progress=101)


def test_category_display_names():
    assert GoalCategory.HEALTH.display_name == "Health & Wellness"
    assert GoalCategory.OTHER.display_name == "Other"


def test_milestone_progress(frozen_now):
    milestones = [
        Milestone(goal_id="g1", title="5k", description="", order=0).mark_complete(),
        Milestone(goal_id="g1", title="10k", description="", order=1),
    ]
    goal = make_goal(id="g1", milestones_detailed=milestones)
    assert goal.completed_milestone_count == 1
    assert goal.milestone_progress == 0.5
    assert make_goal().milestone_progress == 0.0


def test_milestone_mark_complete(frozen_now):
    milestone = Milestone(goal_id="g1", title="5k", description="", order=0)
    done = milestone.mark_complete()
    assert done.is_completed
    assert done.completed_date == frozen_now
    assert done.updated_at == frozen_now
    with pytest.raises(TypeError):
        milestone.copy_with(goal_id="g2")


def test_from_dict_accepts_legacy_and_bare_enums():
    legacy = Goal.from_dict({
        "id": "g1", "title": "CBT daily", "description": "",
        "category": "GoalCategory.personal", "status": "GoalStatus.backlog",
    })
    bare = Goal.from_dict({"title": "CBT daily", "category": "personal", "status": "backlog"})
    assert legacy.category == bare.category == GoalCategory.PERSONAL
    assert legacy.status == bare.status == GoalStatus.BACKLOG
    assert legacy.is_active is False


def test_from_dict_unknown_status_falls_back():
    goal = Goal.from_dict({"title": "x", "category": "GoalCategory.spiritual", "status": "paused"})
    assert goal.status == GoalStatus.ACTIVE
    assert goal.category == GoalCategory.OTHER


def test_to_dict_shape(frozen_now):
    milestone = Milestone(id="m1", goal_id="g1", title="5k", description="", order=0)
    data = make_goal(id="g1", milestones_detailed=[milestone], linked_value_ids=["v1"]).to_dict()
    assert data["category"] == "GoalCategory.fitness"
    assert data["status"] == "GoalStatus.active"
    assert data["milestonesDetailed"][0]["goalId"] == "g1"
    assert data["linkedValueIds"] == ["v1"]
    assert Goal.from_dict(data).milestones_detailed[0] == milestone
