"""Unit tests for EventLog."""

import pytest
from pydantic import ValidationError

from models.event import Severity
from models.event_log import EventLog
from tests.fixtures.core.events import create_notable_event


def fill(log: EventLog, count: int) -> None:
    for i in range(count):
        log.append(create_notable_event(title=f"EVENT {i}", tick=i))


class TestEventLog:
    def test_defaults(self):
        log = EventLog()
        assert log.max_size == 5
        assert log.events == []
        assert log.total_logged == 0

    def test_invalid_max_size(self):
        with pytest.raises(ValidationError):
            EventLog(max_size=0)

    def test_keeps_most_recent(self):
        log = EventLog(max_size=3)
        fill(log, 5)

        assert [e.title for e in log.events] == ["EVENT 2", "EVENT 3", "EVENT 4"]
        assert log.total_logged == 5

    def test_recent_is_newest_first(self):
        log = EventLog()
        fill(log, 3)
        assert [e.title for e in log.recent()] == ["EVENT 2", "EVENT 1", "EVENT 0"]

    def test_recent_limit(self):
        log = EventLog()
        fill(log, 4)
        assert [e.title for e in log.recent(limit=2)] == ["EVENT 3", "EVENT 2"]

    def test_recent_by_severity(self):
        log = EventLog()
        log.append(create_notable_event(title="A"))
        log.append(create_notable_event(title="B", severity=Severity.DANGER))
        log.append(create_notable_event(title="C", severity=Severity.WARNING))

        assert [e.title for e in log.recent(severity=Severity.DANGER)] == ["B"]

    def test_extend(self):
        log = EventLog(max_size=2)
        log.extend([create_notable_event(title=t) for t in ("A", "B", "C")])
        assert [e.title for e in log.events] == ["B", "C"]

    def test_clear(self):
        log = EventLog()
        fill(log, 3)
        log.clear()
        assert log.events == []
        assert log.total_logged == 0
