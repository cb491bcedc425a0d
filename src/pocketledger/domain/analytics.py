"""Analytics domain service."""

from datetime import datetime, UTC
from typing import Optional

from pocketledger.domain.entities import AnalyticsReport, Period
from pocketledger.domain.ledger import as_utc, bucket_by_period
from pocketledger.storage.base import Storage

DEFAULT_PERIOD = Period.MONTHLY


class AnalyticsService:
    """Service for building period analytics."""

    def __init__(self, storage: Storage):
        """Initialize analytics service.

        Args:
            storage: Storage instance
        """
        self.storage = storage

    def get_analytics(
        self,
        owner_id: str,
        period: Optional[str | Period] = None,
        now: Optional[datetime] = None,
    ) -> AnalyticsReport:
        """Build income/expense analytics for the owner.

        Args:
            owner_id: Owning user
            period: daily, weekly, monthly or yearly (defaults to monthly)
            now: Reference time for the lookback window (defaults to now)

        Returns:
            AnalyticsReport for the period

        Raises:
            ValidationError: If period is not recognized
        """
        # Unknown periods are rejected before storage is read
        period = Period.parse(period) if period else DEFAULT_PERIOD
        now = as_utc(now) if now else datetime.now(UTC)

        buckets = bucket_by_period(self.storage.get_transactions(owner_id), period, now)
        return AnalyticsReport(
            period=period,
            now=now,
            series=buckets.series,
            categories=buckets.categories,
            total_income=buckets.total_income,
            total_expense=buckets.total_expense,
        )
