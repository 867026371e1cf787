"""Wall-clock source used for expiration checks."""
import time


def current_unix_seconds() -> int:
    """Current time as whole Unix seconds."""
    return int(time.time())
