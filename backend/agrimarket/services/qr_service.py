"""
QR Service - signs product metadata and renders it as a QR code

The QR payload is the JSON text of::

    {"productId": ..., "batchId": ..., "timestamp": ..., "signature": <JWT>}

The signature is an HS256 token over the same three fields, created with a
single process-wide shared secret. There are no per-supplier keys, no key
rotation and no revocation.
"""
import io
import json
import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_H
from jose import jwt, JWTError

from agrimarket.core.config import settings
from agrimarket.core.exceptions import InvalidQRCodeError

logger = logging.getLogger(__name__)

SIGNED_FIELDS = ("productId", "batchId", "timestamp")
ALGORITHM = "HS256"


class QRService:
    """Sign, render and verify product QR codes"""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        expiry_days: Optional[int] = None,
        image_width: Optional[int] = None
    ):
        self.secret_key = secret_key or settings.QR_SECRET_KEY
        self.expiry_days = expiry_days if expiry_days is not None else settings.QR_TOKEN_EXPIRY_DAYS
        self.image_width = image_width or settings.QR_IMAGE_WIDTH

    def sign_product_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Sign product metadata

        Args:
            data: {"productId", "batchId", "timestamp"}

        Returns:
            The same fields plus "signature" (JWT expiring after expiry_days)
        """
        claims = dict(data)
        claims["exp"] = datetime.now(timezone.utc) + timedelta(days=self.expiry_days)
        token = jwt.encode(claims, self.secret_key, algorithm=ALGORITHM)
        return {**data, "signature": token}

    def generate_qr_code(self, text: str) -> str:
        """
        Render text as a PNG QR code

        Uses the highest error-correction level and a one-module border,
        sized to roughly image_width pixels.

        Returns:
            data:image/png;base64,... URL
        """
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, border=1)
        qr.add_data(text)
        qr.make(fit=True)
        qr.box_size = max(1, self.image_width // (qr.modules_count + 2 * qr.border))

        image = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")

        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def verify_qr_code(self, qr_data: str) -> Dict[str, Any]:
        """
        Verify a scanned QR payload

        The signature is valid when the token verifies against the shared
        secret, has not expired, and its claims match the scanned fields.

        Returns:
            Scanned fields (without "signature") plus "signatureValid"

        Raises:
            InvalidQRCodeError: payload is not a JSON object
        """
        try:
            parsed = json.loads(qr_data)
        except (json.JSONDecodeError, TypeError) as e:
            raise InvalidQRCodeError(f"Invalid QR code data: {e}")

        if not isinstance(parsed, dict):
            raise InvalidQRCodeError("Invalid QR code data: expected a JSON object")

        signature = parsed.pop("signature", None)
        return {**parsed, "signatureValid": self._signature_matches(signature, parsed)}

    def _signature_matches(self, signature: Any, data: Dict[str, Any]) -> bool:
        if not isinstance(signature, str) or not signature:
            logger.warning("QR payload has no signature")
            return False

        try:
            claims = jwt.decode(signature, self.secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            logger.warning(f"Signature verification failed: {e}")
            return False

        for field in SIGNED_FIELDS:
            if claims.get(field) != data.get(field):
                logger.warning(f"Signed {field} does not match scanned payload")
                return False

        return True
