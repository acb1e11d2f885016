import math
from datetime import datetime


# --- parsing helpers ---
def parse_float(s) -> float | None:
    """float(s), or None for blanks, junk and non-finite values."""
    if s is None or isinstance(s, bool) or str(s).strip() == "":
        return None
    try:
        value = float(s)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_savings(s: str) -> list[float]:
    """"50, 10,25" -> [50.0, 10.0, 25.0]; junk tokens are dropped."""
    out = []
    for tok in (s or "").split(","):
        value = parse_float(tok)
        if value is not None:
            out.append(value)
    return out


def parse_when(s: str | None) -> datetime | None:
    """ISO-8601 instant; None when absent. Raises ValueError when malformed."""
    if s is None or str(s).strip() == "":
        return None
    return datetime.fromisoformat(str(s).strip())


def truthy(v) -> bool:
    return str(v).strip().lower() in {"1", "true", "yes", "on"}
