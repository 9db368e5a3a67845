from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional

MILESTONE_TOP_1 = "top_1"
MILESTONE_TOP_5 = "top_5"
MILESTONE_TOP_10 = "top_10"
MILESTONE_BIG_DAY = "big_day"
MILESTONE_STREAK = "streak"

BIG_DAY_SALES = 10
STREAK_DAYS = 5


@dataclass(frozen=True)
class Milestone:
    type: str
    message: str
    user_id: str
    user_name: str


def detect_milestones(
    user_id: str,
    user_name: str,
    rank: Optional[int] = None,
    today_sales: Optional[int] = None,
    streak: Optional[int] = None,
) -> List[Milestone]:
    milestones: List[Milestone] = []

    if rank is not None and rank > 0:
        if rank == 1:
            milestones.append(
                Milestone(MILESTONE_TOP_1, f"{user_name} is now #1 on the leaderboard!", user_id, user_name)
            )
        elif rank <= 5:
            milestones.append(
                Milestone(MILESTONE_TOP_5, f"{user_name} broke into the Top 5!", user_id, user_name)
            )
        elif rank <= 10:
            milestones.append(
                Milestone(MILESTONE_TOP_10, f"{user_name} is now in the Top 10!", user_id, user_name)
            )

    if today_sales is not None and today_sales >= BIG_DAY_SALES:
        milestones.append(
            Milestone(
                MILESTONE_BIG_DAY,
                f"{user_name} just hit {today_sales} sales today!",
                user_id,
                user_name,
            )
        )

    if streak is not None and streak >= STREAK_DAYS:
        milestones.append(
            Milestone(
                MILESTONE_STREAK,
                f"{user_name} is on a {streak}-day winning streak!",
                user_id,
                user_name,
            )
        )
    return milestones


def calculate_sales_streak(sales_by_day: Dict[date, int], today: date) -> int:
    """Consecutive days ending ``today`` with at least one sale."""
    streak = 0
    day = today
    while sales_by_day.get(day, 0) > 0:
        streak += 1
        day -= timedelta(days=1)
    return streak
