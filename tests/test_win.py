from mentorme.models.win import Win, WinCategory, WinSource


def test_tables():
    assert WinSource.GOAL_COMPLETE.display_name == "Goal Completed"
    assert WinSource.STREAK_MILESTONE.emoji == "🔥"
    assert WinSource.STREAK_MILESTONE.is_automatic
    assert not WinSource.MANUAL.is_automatic
    assert WinCategory.HEALTH.display_name == "Health & Wellness"
    assert WinCategory.HABIT.emoji == "🔄"


def test_emoji_prefers_category():
    assert Win(description="Ran 5k", source=WinSource.MANUAL, category=WinCategory.FITNESS).emoji == "💪"
    assert Win(description="Ran 5k", source=WinSource.JOURNAL).emoji == "📝"


def test_json_uses_bare_names(frozen_now):
    win = Win(description="Finished the course", source=WinSource.GOAL_COMPLETE, category=WinCategory.LEARNING,
              linked_goal_id="g1")
    data = win.to_dict()
    assert data["source"] == "goalComplete"
    assert data["category"] == "learning"
    assert Win.from_dict(data) == win


def test_unknown_values_fall_back(frozen_now):
    win = Win.from_dict({"description": "x", "source": "telepathy", "category": "cosmic"})
    assert win.source == WinSource.MANUAL
    assert win.category == WinCategory.OTHER


def test_missing_category_stays_empty(frozen_now):
    assert Win.from_dict({"description": "x", "source": "reflection"}).category is None
