import secrets
import time


def generate_order_number(prefix: str) -> str:
    """``<prefix>-<epoch ms>-<3 random digits>``."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.randbelow(1000):03d}"
