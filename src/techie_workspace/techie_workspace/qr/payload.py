"""QR payload content: ``{"userId", "workspace", "timestamp", "token"}`` as JSON.

Only payloads issued for this workspace are accepted.
"""

from __future__ import annotations

import base64
import io
import json
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

import qrcode

from ..common.datetime_utils import to_epoch_millis
from ..core.constants import QR_TOKEN_BYTES, WORKSPACE_ID
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class QRPayload:
    user_id: int
    workspace: str
    timestamp: int
    token: str

    def to_json(self) -> str:
        return json.dumps(
            {
                "userId": self.user_id,
                "workspace": self.workspace,
                "timestamp": self.timestamp,
                "token": self.token,
            }
        )


def build_payload(user_id: int, now: datetime) -> QRPayload:
    return QRPayload(
        user_id=int(user_id),
        workspace=WORKSPACE_ID,
        timestamp=to_epoch_millis(now),
        token=secrets.token_hex(QR_TOKEN_BYTES),
    )


def parse_payload(raw: Union[str, bytes, dict]) -> QRPayload:
    if isinstance(raw, dict):
        data: Any = raw
    else:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            raise ValidationError("QR code is not a valid payload")

    if not isinstance(data, dict):
        raise ValidationError("QR code is not a valid payload")

    if data.get("workspace") != WORKSPACE_ID:
        raise ValidationError("QR code does not belong to this workspace")

    user_id = data.get("userId")
    timestamp = data.get("timestamp")
    token = data.get("token")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise ValidationError("QR code has no valid user id")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValidationError("QR code has no valid timestamp")
    if not isinstance(token, str) or not token:
        raise ValidationError("QR code has no token")

    return QRPayload(user_id=user_id, workspace=WORKSPACE_ID, timestamp=timestamp, token=token)


def encode_data_url(data: str) -> str:
    """Render ``data`` as a PNG QR image and return it as a ``data:`` URL."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
