"""Tests for the mocked dashboard payload."""

from econirvana.auth.models import User
from econirvana.dashboard import build_dashboard


def test_dashboard_greets_user() -> None:
    dash = build_dashboard(User(id="1", name="Demo User", email="demo@example.com"))
    assert dash.greeting == "Welcome back, Demo User!"
    assert dash.user.email == "demo@example.com"
    assert dash.eco_level == "Level 2 Recycler"


def test_dashboard_statistics() -> None:
    dash = build_dashboard(User(id="x", name="Jane", email="jane@x.com"))
    assert dash.stats.items_recycled == 12
    assert dash.stats.co2_saved_kg == 45.8
    assert dash.stats.points_earned == 230
    assert dash.impact.trees_planted == 5


def test_dashboard_activity_and_events() -> None:
    dash = build_dashboard(User(id="x", name="Jane", email="jane@x.com"))
    assert [a.item for a in dash.recent_activities] == ["Laptop", "Smartphone", "Printer"]
    assert sum(a.points for a in dash.recent_activities) == 120
    assert len(dash.upcoming_events) == 2
    assert dash.upcoming_events[0].title == "Community Recycling Day"


def test_dashboard_serializes_to_json() -> None:
    data = build_dashboard(User(id="x", name="Jane", email="jane@x.com")).model_dump(mode="json")
    assert data["stats"]["points_earned"] == 230
    assert data["recent_activities"][0]["category"] == "Electronics"
