import copy
import logging
import os
import os.path
from typing import Optional

from rich.logging import RichHandler
from yaml import safe_load, YAMLError

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.errors import ConfigurationError

AUDIT_LOGGER = "xl9045qi.hoteldesk.audit"

def merge(base: dict, override: dict) -> dict:
    """Recursively merge 'override' into a copy of 'base'. Nested dicts are merged, anything else is replaced."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result

def default_job() -> dict:
    return copy.deepcopy(data.job)

def load_job(path: Optional[str] = None) -> dict:
    """Load a hotel desk job file and merge it over the packaged defaults.

    Args:
        path (str, optional): Path to a YAML file with a top-level 'job' key. If None,
            the packaged defaults are returned as-is.

    Returns:
        dict: The merged job configuration.

    Raises:
        ConfigurationError: If the file cannot be read or does not contain a 'job' mapping.
    """
    if path is None:
        return default_job()

    try:
        with open(path, "r") as f:
            loaded = safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read job file '{path}': {e}") from e
    except YAMLError as e:
        raise ConfigurationError(f"Job file '{path}' is not valid YAML: {e}") from e

    if loaded is None:
        return default_job()
    if not isinstance(loaded, dict) or not isinstance(loaded.get("job", {}), dict):
        raise ConfigurationError(f"Job file '{path}' must contain a 'job' mapping")

    return merge(data.job, loaded.get("job") or {})

def configure_logging(job: dict) -> None:
    """Install console and file handlers according to job['logging'].

    The console gets a RichHandler at the configured level. The general log file
    receives everything from INFO up, and the audit logger writes to its own file.
    """
    log_cfg = job.get("logging", {})
    level = getattr(logging, str(log_cfg.get("level", "WARNING")).upper(), logging.WARNING)

    root = logging.getLogger("xl9045qi.hoteldesk")
    root.setLevel(logging.DEBUG)
    _remove_handlers(root)

    console_handler = RichHandler(show_path=False, markup=False)
    console_handler.setLevel(level)
    root.addHandler(console_handler)

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    log_file = log_cfg.get("file")
    if log_file:
        _ensure_parent(log_file)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    audit = logging.getLogger(AUDIT_LOGGER)
    _remove_handlers(audit)
    audit_file = log_cfg.get("audit_file")
    if audit_file:
        _ensure_parent(audit_file)
        audit_handler = logging.FileHandler(audit_file, encoding="utf-8")
        audit_handler.setFormatter(logging.Formatter("%(asctime)s AUDIT %(message)s"))
        audit.addHandler(audit_handler)

def _remove_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

def _ensure_parent(path: str):
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
