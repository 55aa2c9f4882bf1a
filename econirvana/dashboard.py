"""Dashboard payload for the signed-in user.

All figures are mocked: every account sees the same statistics until a real
recycling history exists.
"""

from pydantic import BaseModel

from econirvana.auth.models import User

ECO_LEVEL = "Level 2 Recycler"


class RecyclingStats(BaseModel):
    items_recycled: int
    co2_saved_kg: float
    points_earned: int


class Activity(BaseModel):
    id: int
    type: str
    item: str
    date: str
    points: int
    category: str


class Event(BaseModel):
    id: int
    title: str
    date: str
    time: str
    location: str
    description: str


class EnvironmentalImpact(BaseModel):
    trees_planted: int
    water_saved: int
    energy_saved: int


class Dashboard(BaseModel):
    greeting: str
    user: User
    eco_level: str
    stats: RecyclingStats
    recent_activities: list[Activity]
    upcoming_events: list[Event]
    impact: EnvironmentalImpact


RECYCLING_STATS = RecyclingStats(items_recycled=12, co2_saved_kg=45.8, points_earned=230)

RECENT_ACTIVITIES = [
    Activity(id=1, type="Recycled", item="Laptop", date="2 days ago", points=50, category="Electronics"),
    Activity(id=2, type="Recycled", item="Smartphone", date="1 week ago", points=30, category="Electronics"),
    Activity(id=3, type="Recycled", item="Printer", date="2 weeks ago", points=40, category="Electronics"),
]

UPCOMING_EVENTS = [
    Event(
        id=1,
        title="Community Recycling Day",
        date="June 5, 2023",
        time="10:00 AM - 2:00 PM",
        location="Downtown Green City",
        description="Bring your electronic waste for free recycling. All community members welcome!",
    ),
    Event(
        id=2,
        title="Electronics Collection Drive",
        date="July 15, 2023",
        time="9:00 AM - 3:00 PM",
        location="Westside Community Center",
        description="Special collection event for computers, TVs, and other electronic devices.",
    ),
]

ENVIRONMENTAL_IMPACT = EnvironmentalImpact(trees_planted=5, water_saved=120, energy_saved=85)


def build_dashboard(user: User) -> Dashboard:
    return Dashboard(
        greeting=f"Welcome back, {user.name}!",
        user=user,
        eco_level=ECO_LEVEL,
        stats=RECYCLING_STATS,
        recent_activities=RECENT_ACTIVITIES,
        upcoming_events=UPCOMING_EVENTS,
        impact=ENVIRONMENTAL_IMPACT,
    )
