"""Weight statistics over a period and over the whole treatment."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from jab_tracker.domain.models import ProfileSnapshot, WeightEntry
from jab_tracker.domain.stats import (
    DerivedOverallStats,
    DerivedPeriodStats,
    ProgressSummary,
    WeightStatsReport,
)
from jab_tracker.services.memo import RequestMemo, fetch
from jab_tracker.services.metrics import (
    calculate_goal_progress,
    calculate_percent_change,
    calculate_to_goal,
    calculate_total_change,
    calculate_weight_stats,
    summarize_progress,
)
from jab_tracker.services.repositories import ProfileRepository, WeightRepository
from jab_tracker.services.rounding import round_half_up, round_optional

_logger = logging.getLogger(__name__)


def compute_period_stats(entries: Sequence[WeightEntry]) -> DerivedPeriodStats:
    """Return statistics for chronologically ordered entries in a window."""
    if not entries:
        return DerivedPeriodStats(count=0)
    weights = [entry.weight_kg for entry in entries]
    summary = calculate_weight_stats(weights)
    start_weight, end_weight = weights[0], weights[-1]
    return DerivedPeriodStats(
        count=len(weights),
        start_weight=summary.first,
        end_weight=summary.last,
        min_weight=summary.min,
        max_weight=summary.max,
        avg_weight=summary.avg,
        total_change=summary.change,
        percent_change=round_half_up(
            calculate_percent_change(start_weight, end_weight), 2
        ),
    )


def compute_overall_stats(
    first_ever: WeightEntry | None,
    latest: WeightEntry | None,
    profile: ProfileSnapshot | None,
) -> DerivedOverallStats:
    """Return lifetime progress, independent of any requested window.

    The profile's starting weight wins over the first logged entry. Progress is
    only reported when starting, current and goal weights are all known.
    """
    starting = profile.starting_weight_kg if profile else None
    if starting is None and first_ever is not None:
        starting = first_ever.weight_kg
    current = latest.weight_kg if latest else None
    goal = profile.goal_weight_kg if profile else None

    total_lost = None
    if starting is not None and current is not None:
        total_lost = round_half_up(-calculate_total_change(starting, current), 2)
    remaining = None
    if goal is not None and current is not None:
        remaining = round_half_up(calculate_to_goal(current, goal), 2)
    progress = None
    if starting is not None and goal is not None and current is not None:
        progress = round_half_up(calculate_goal_progress(starting, current, goal), 2)

    return DerivedOverallStats(
        starting_weight=round_optional(starting),
        current_weight=round_optional(current),
        goal_weight=round_optional(goal),
        total_lost=total_lost,
        remaining_to_goal=remaining,
        progress_percent=progress,
    )


def build_weight_report(
    period_entries: Sequence[WeightEntry],
    first_ever: WeightEntry | None,
    latest: WeightEntry | None,
    profile: ProfileSnapshot | None,
) -> WeightStatsReport:
    return WeightStatsReport(
        period=compute_period_stats(period_entries),
        overall=compute_overall_stats(first_ever, latest, profile),
    )


@dataclass
class WeightStatsService:
    """Service for weight statistics and progress."""

    weights: WeightRepository
    profiles: ProfileRepository

    async def get_stats(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> WeightStatsReport:
        """Return period statistics for [start, end] plus overall progress."""
        period_entries, first_ever, latest, profile = await asyncio.gather(
            fetch(
                memo,
                ("weights", user_id, start, end),
                lambda: self.weights.list_weights(user_id, start, end),
            ),
            fetch(
                memo,
                ("first_weight", user_id),
                lambda: self.weights.get_first_weight(user_id),
            ),
            fetch(
                memo,
                ("latest_weight", user_id),
                lambda: self.weights.get_latest_weight(user_id),
            ),
            fetch(
                memo,
                ("profile", user_id),
                lambda: self.profiles.get_profile(user_id),
            ),
        )
        report = build_weight_report(period_entries, first_ever, latest, profile)
        _logger.info(
            "Weight stats: user_id=%s count=%s progress=%s",
            user_id,
            report.period.count,
            report.overall.progress_percent,
        )
        return report

    async def get_progress(
        self,
        user_id: UUID,
        now: datetime | None = None,
        memo: RequestMemo | None = None,
    ) -> ProgressSummary:
        """Return headline progress numbers over every logged weight."""
        resolved_now = now or datetime.now(tz=UTC)
        entries, profile = await asyncio.gather(
            fetch(
                memo,
                ("weights", user_id, None, None),
                lambda: self.weights.list_weights(user_id, None, None),
            ),
            fetch(
                memo,
                ("profile", user_id),
                lambda: self.profiles.get_profile(user_id),
            ),
        )
        return summarize_progress(entries, profile, resolved_now)
