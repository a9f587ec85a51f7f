from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import BillingRecord


class BillingRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[BillingRecord]:
        """All records, most recent start date first."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start: datetime, end: datetime) -> Sequence[BillingRecord]:
        """Records whose start date lies in [start, end], most recent first."""

        raise NotImplementedError
