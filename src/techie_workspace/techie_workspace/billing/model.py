from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import BillingStatus, PlanType


@dataclass(frozen=True)
class BillingRecord:
    """Domain entity: one entry of the append-only billing log."""

    billing_id: int
    user_id: int
    plan_type: PlanType
    amount: int
    start_date: datetime
    end_date: Optional[datetime] = None
    status: BillingStatus = BillingStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "billing_id": self.billing_id,
            "user_id": self.user_id,
            "plan_type": self.plan_type.value,
            "amount": self.amount,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "status": self.status.value,
        }
