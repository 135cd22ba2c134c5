import os

def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")

def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    try:
        return int(val) if val is not None and val.strip() else default
    except ValueError:
        return default

def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    try:
        return float(val) if val is not None and val.strip() else default
    except ValueError:
        return default

def get_flags() -> dict:
    """
    Backend on/off switches.
    """
    return {
        "CONSISTENCY_CHECK_ENABLED": _env_bool("CONSISTENCY_CHECK_ENABLED", True),
        "TRACE_ENABLED": _env_bool("TRACE_ENABLED", True),
    }

def get_settings() -> dict:
    """
    Tunables and credentials. Read on every call so tests can monkeypatch env.
    """
    return {
        "ANTHROPIC_API_KEY": os.getenv("ANTHROPIC_API_KEY", ""),
        "CONSISTENCY_MODEL": os.getenv("CONSISTENCY_MODEL", "claude-3-haiku-20240307"),
        "CONSISTENCY_TIMEOUT": _env_float("CONSISTENCY_TIMEOUT", 15.0),
        "CONSISTENCY_WORKERS": max(1, _env_int("CONSISTENCY_WORKERS", 1)),
        "TRACE_DIR": os.getenv("SEMANTIC_TRACE_DIR", os.path.join(os.getcwd(), "logs")),
        "DEFAULT_COMPANY_SIZE": max(1, _env_int("DEFAULT_COMPANY_SIZE", 50)),
    }
