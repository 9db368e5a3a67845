from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from salesboard.analytics.aggregation import SalesMetrics
from salesboard.models.sales import UserRecord


@dataclass
class RankingEntry:
    key: str
    name: str
    team: str
    region: str
    metrics: SalesMetrics = field(default_factory=SalesMetrics)
    member_count: int = 1
    rank: int = 0


def build_user_entries(
    users: Iterable[UserRecord], metrics_by_user: Dict[str, SalesMetrics]
) -> List[RankingEntry]:
    return [
        RankingEntry(
            key=user.id,
            name=user.name,
            team=user.team,
            region=user.region,
            metrics=metrics_by_user.get(user.id) or SalesMetrics(),
        )
        for user in users
    ]


def build_team_entries(
    users: Iterable[UserRecord], metrics_by_user: Dict[str, SalesMetrics]
) -> List[RankingEntry]:
    # Teams appear in the order of their first member so ties stay deterministic.
    teams: Dict[str, RankingEntry] = {}
    for user in users:
        team_name = user.team or "Unassigned"
        user_metrics = metrics_by_user.get(user.id) or SalesMetrics()
        entry = teams.get(team_name)
        if entry is None:
            teams[team_name] = RankingEntry(
                key=team_name,
                name=team_name,
                team=team_name,
                region=user.region,
                metrics=replace(user_metrics),
            )
            continue
        entry.member_count += 1
        entry.metrics.sales += user_metrics.sales
        entry.metrics.cancels += user_metrics.cancels
        entry.metrics.revenue += user_metrics.revenue
        entry.metrics.installs += user_metrics.installs
        if entry.region != user.region:
            entry.region = "Mixed"
    return list(teams.values())


def rank_by_sales(entries: Iterable[RankingEntry]) -> List[RankingEntry]:
    # sorted() is stable, so equal sales counts keep their input order.
    ordered = sorted(entries, key=lambda entry: -entry.metrics.sales)
    return [replace(entry, rank=index) for index, entry in enumerate(ordered, start=1)]


def find_rank(ranked: Iterable[RankingEntry], key: str) -> Optional[int]:
    for index, entry in enumerate(ranked, start=1):
        if entry.key == key:
            return index
    return None


def top_rankings(ranked: List[RankingEntry], limit: int) -> List[RankingEntry]:
    return [replace(entry, rank=index) for index, entry in enumerate(ranked[:limit], start=1)]
