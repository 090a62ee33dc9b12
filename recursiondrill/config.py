import os
from typing import List, Optional

from pydantic import BaseModel


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


class DrillConfig(BaseModel):
    """Settings for a :class:`~recursiondrill.drill_runner.DrillRunner` run.

    Every field can be supplied through a ``RECURSIONDRILL_*`` environment
    variable via :meth:`from_env`; explicit keyword arguments win.
    """

    problem: str = "fibonacci"
    inputs: Optional[List[int]] = None
    inputs_min: int = 0
    inputs_max: int = 30
    inputs_num_intervals: int = 10
    compare_naive: bool = True
    naive_limit: Optional[int] = None
    share_cache: bool = True
    results_version: int = 1
    num_concurrent_requests: int = 1
    save_results: bool = False
    overwrite_results: bool = False
    results_dir: str = "results"
    print_ongoing_status: bool = True

    @classmethod
    def from_env(cls, **overrides) -> "DrillConfig":
        values = {
            "problem": os.getenv("RECURSIONDRILL_PROBLEM", "fibonacci"),
            "inputs_min": int(os.getenv("RECURSIONDRILL_INPUTS_MIN", "0")),
            "inputs_max": int(os.getenv("RECURSIONDRILL_INPUTS_MAX", "30")),
            "inputs_num_intervals": int(os.getenv("RECURSIONDRILL_INPUTS_NUM_INTERVALS", "10")),
            "compare_naive": _env_bool("RECURSIONDRILL_COMPARE_NAIVE", True),
            "naive_limit": _env_int("RECURSIONDRILL_NAIVE_LIMIT"),
            "share_cache": _env_bool("RECURSIONDRILL_SHARE_CACHE", True),
            "results_version": int(os.getenv("RECURSIONDRILL_RESULTS_VERSION", "1")),
            "num_concurrent_requests": int(os.getenv("RECURSIONDRILL_CONCURRENCY", "1")),
            "save_results": _env_bool("RECURSIONDRILL_SAVE_RESULTS", False),
            "overwrite_results": _env_bool("RECURSIONDRILL_OVERWRITE_RESULTS", False),
            "results_dir": os.getenv("RECURSIONDRILL_RESULTS_DIR", "results"),
            "print_ongoing_status": _env_bool("RECURSIONDRILL_PRINT_STATUS", True),
        }

        inputs = os.getenv("RECURSIONDRILL_INPUTS")
        if inputs:
            values["inputs"] = [int(item) for item in inputs.split(",") if item.strip()]

        values.update(overrides)
        return cls(**values)
