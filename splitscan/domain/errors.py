"""Errors raised by the scan decoding core."""

from typing import Literal

RecoveryAction = Literal["manual_entry", "retry", "dismiss"]


class DecodeError(ValueError):
    """A barcode/QR payload could not be decoded into receipt data."""

    user_message = "The code data couldn't be processed. This might not be a supported receipt code."
    recovery_action: RecoveryAction = "manual_entry"

    def __init__(self, message: str, payload: str = "") -> None:
        super().__init__(message)
        self.payload = payload


class InvalidPayload(DecodeError):
    """Payload is neither JSON, key-value data, nor a bare transaction id."""

    user_message = (
        "We couldn't find any receipt information in this code. You can add the items manually instead."
    )
