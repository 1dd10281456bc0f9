# src/kubefit/core/config.py

import logging
import os

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


def _get_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got '{raw}'.") from e


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Cluster access ---
    # KUBECONFIG may hold a colon-separated list; the first entry is used.
    KUBECONFIG = os.path.expanduser(
        (os.getenv("KUBECONFIG") or "~/.kube/config").split(os.pathsep)[0]
    )

    # --- DaemonSet request defaults (from the agent chart's values.yaml) ---
    DS_CPU_REQUEST = os.getenv("DS_CPU_REQUEST", "100m")
    DS_MEMORY_REQUEST = os.getenv("DS_MEMORY_REQUEST", "500Mi")

    # --- Analysis variables ---
    MAX_WORKERS = _get_int("MAX_WORKERS", 8)
    OVERPROVISION_THRESHOLD_PERCENT = _get_int("OVERPROVISION_THRESHOLD_PERCENT", 50)
    OVERPROVISION_TOP_N = _get_int("OVERPROVISION_TOP_N", 10)

    # --- Report variables ---
    NODE_NAME_WIDTH = _get_int("NODE_NAME_WIDTH", 44)

    def validate_instance(self):
        if self.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR or CRITICAL.")
        if self.MAX_WORKERS < 1:
            raise ValueError("MAX_WORKERS must be at least 1.")
        if not 1 <= self.OVERPROVISION_THRESHOLD_PERCENT <= 100:
            raise ValueError("OVERPROVISION_THRESHOLD_PERCENT must be between 1 and 100.")
        if self.OVERPROVISION_TOP_N < 1:
            raise ValueError("OVERPROVISION_TOP_N must be at least 1.")
        if self.NODE_NAME_WIDTH < 1:
            raise ValueError("NODE_NAME_WIDTH must be at least 1.")
        if not self.DS_CPU_REQUEST or not self.DS_MEMORY_REQUEST:
            logging.warning("DS_CPU_REQUEST or DS_MEMORY_REQUEST is empty; it will be evaluated as 0.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
