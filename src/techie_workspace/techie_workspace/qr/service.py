from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Union

from ..common.authorization import Caller, ensure_can_access
from ..common.datetime_utils import Clock, add_months, now_local
from ..core.constants import QR_VALIDITY_MONTHS
from ..core.exceptions import NotFoundError, ValidationError
from ..sessions.model import Session
from ..sessions.service import SessionLedger
from ..users.repository import UserRepository
from .payload import build_payload, encode_data_url, parse_payload

logger = logging.getLogger(__name__)

CHECKED_IN = "check_in"
CHECKED_OUT = "check_out"


@dataclass(frozen=True)
class IssuedQRCode:
    qr_code: str
    expiry_date: datetime

    def to_dict(self) -> dict:
        return {"qr_code": self.qr_code, "expiry_date": self.expiry_date.isoformat()}


@dataclass(frozen=True)
class ScanResult:
    action: str
    session: Session

    def to_dict(self) -> dict:
        return {"action": self.action, "session": self.session.to_dict()}


class QRService:
    """Issue member QR codes and turn scanned payloads into check-in/out."""

    def __init__(
        self,
        users: UserRepository,
        ledger: SessionLedger,
        *,
        clock: Clock = now_local,
        encoder: Callable[[str], str] = encode_data_url,
    ):
        self._users = users
        self._ledger = ledger
        self._clock = clock
        self._encoder = encoder

    def generate(self, user_id: int) -> IssuedQRCode:
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        now = self._clock()
        qr_code = self._encoder(build_payload(user_id, now).to_json())
        expiry = add_months(now, QR_VALIDITY_MONTHS)
        self._users.set_qr_code(int(user_id), qr_code=qr_code, qr_expiry=expiry)
        logger.info("Issued QR code for user %s (expires %s)", user_id, expiry.isoformat())
        return IssuedQRCode(qr_code=qr_code, expiry_date=expiry)

    def current(self, user_id: int) -> IssuedQRCode:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if not user.qr_code or not user.qr_expiry or user.qr_expiry < self._clock():
            raise NotFoundError("No valid QR code found")
        return IssuedQRCode(qr_code=user.qr_code, expiry_date=user.qr_expiry)

    def scan(self, raw: Union[str, bytes, dict], caller: Caller) -> ScanResult:
        """Check the payload's member out if they have an active session, otherwise in.

        The payload is validated before the ledger is touched.
        """
        try:
            payload = parse_payload(raw)
        except ValidationError as exc:
            logger.warning("Rejected QR scan from user %s: %s", caller.user_id, exc)
            raise

        ensure_can_access(caller, payload.user_id, what="check-ins")

        active = self._ledger.get_active(payload.user_id)
        if active:
            return ScanResult(action=CHECKED_OUT, session=self._ledger.check_out(active.session_id, caller))
        return ScanResult(action=CHECKED_IN, session=self._ledger.check_in(payload.user_id))
