import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

STATE_FILE = "autolytiq_state.json"


def state_file() -> str:
    return os.environ.get("AUTOLYTIQ_STATE_FILE", STATE_FILE)


def _serializable(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool, list, dict)) or value is None


def _read_all() -> Dict[str, Dict[str, Any]]:
    path = state_file()
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read saved inputs", extra={"path": path, "error": str(exc)})
        return {}
    return data if isinstance(data, dict) else {}


def load_page_state(page: str) -> Dict[str, Any]:
    """Last entered values for ``page``, or an empty dict."""
    values = _read_all().get(page)
    return dict(values) if isinstance(values, dict) else {}


def save_page_state(page: str, values: Dict[str, Any]) -> None:
    """Persist the serializable subset of ``values`` under ``page``."""
    data = _read_all()
    data[page] = {k: v for k, v in values.items() if _serializable(v)}
    path = state_file()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)
    except OSError as exc:
        logger.warning("Could not save inputs", extra={"path": path, "error": str(exc)})
