from __future__ import annotations

MASK = "***"


def mask_phone(phone: str, keep: int = 3) -> str:
    # Log-safe form of a destination: '09123456789' -> '091***789'.
    if not phone or len(phone) < 2 * keep:
        return MASK
    return f"{phone[:keep]}{MASK}{phone[-keep:]}"
