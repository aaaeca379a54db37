"""
Time-sensitive recommendations for opportunities starting soon.
"""

import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from backend.src.juntos.ml.recommendations.models import (
    Opportunity,
    RecommendationItem,
    StrategyTag,
    VolunteerProfile,
    as_utc,
    is_candidate,
)

SECONDS_PER_DAY = 24 * 60 * 60


class UrgentRecommender:
    """
    Surfaces unseen opportunities whose start date falls inside the window.

    Scores run from 0.8 for an opportunity starting now down to 0.5 at the
    edge of the window, using whole days rounded up.
    """

    def __init__(
        self, window_days: int = 7, max_score: float = 0.8, score_span: float = 0.3
    ):
        self.window_days = window_days
        self.max_score = max_score
        self.score_span = score_span

    def recommend(
        self,
        target: VolunteerProfile,
        candidates: Iterable[Opportunity],
        limit: int = 5,
        now: Optional[datetime] = None,
    ) -> List[RecommendationItem]:
        """
        Get opportunities starting within the window, soonest first.

        Args:
            target: Volunteer receiving recommendations
            candidates: Opportunity universe
            limit: Number of recommendations to return
            now: Reference time, defaults to the current UTC time
        """
        now = as_utc(now) or datetime.now(timezone.utc)
        seen_ids = target.history.seen_ids

        upcoming = []
        for opportunity in candidates:
            if opportunity.start_date is None or not is_candidate(opportunity, seen_ids):
                continue
            days_until_start = (
                opportunity.start_date - now
            ).total_seconds() / SECONDS_PER_DAY
            if 0 <= days_until_start <= self.window_days:
                upcoming.append((opportunity, days_until_start))

        upcoming.sort(key=lambda pair: pair[0].start_date)

        items = []
        for opportunity, days_until_start in upcoming[: max(limit, 0)]:
            days = math.ceil(days_until_start)
            items.append(
                RecommendationItem(
                    opportunity=opportunity,
                    score=self.max_score - (days / self.window_days) * self.score_span,
                    strategy=StrategyTag.URGENT,
                    reasons=[
                        f"Starts in {days} day{'' if days == 1 else 's'}",
                        "Urgent opportunity",
                    ],
                )
            )
        return items
