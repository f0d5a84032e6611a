# recordbench/settings.py
import os


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


LOG_LEVEL = os.getenv("RECORDBENCH_LOG_LEVEL", "INFO")

# Runs per benchmark; durations report the fastest run.
BENCHMARK_REPEAT = _env_int("RECORDBENCH_BENCHMARK_REPEAT", 1)
