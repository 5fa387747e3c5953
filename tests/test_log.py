import json
import logging

import pytest

from autolytiq.log import setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_records_carry_service(capsys, restore_root):
    setup_logging("debug")
    logging.getLogger("autolytiq.test").info("hello", extra={"domain": "auto"})
    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "hello"
    assert record["level"] == "INFO"
    assert record["service"] == "autolytiq"
    assert record["domain"] == "auto"
    assert "timestamp" in record


def test_calculations_log_at_debug_only(capsys, restore_root):
    from autolytiq.calculators import evaluate_affordability
    from autolytiq.models import AffordabilityInputs

    setup_logging("INFO")
    evaluate_affordability(AffordabilityInputs(monthly_gross_income=5000))
    assert capsys.readouterr().out == ""
