"""JSONFormatter surfaces domain extras on structured log lines."""

import json
import logging
from uuid import uuid4

from app.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.tag_reconciler", logging.WARNING, __file__, 1,
        "Tags skipped", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields_present():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "WARNING"
    assert line["logger"] == "app.services.tag_reconciler"
    assert line["message"] == "Tags skipped"
    assert "timestamp" in line


def test_extra_ids_serialized_as_strings():
    project_id = uuid4()
    line = json.loads(JSONFormatter().format(_record(project_id=project_id, tag_name="rust")))
    assert line["project_id"] == str(project_id)
    assert line["tag_name"] == "rust"


def test_unknown_extras_are_ignored():
    line = json.loads(JSONFormatter().format(_record(password="hunter2")))
    assert "password" not in line
