"""Core fixtures."""

from tests.fixtures.core.scenarios import (
    create_scenario,
    create_historic_event,
    QUIET_PHYSICS,
)
from tests.fixtures.core.states import (
    create_state,
    create_spe,
)
from tests.fixtures.core.events import (
    create_notable_event,
    INFO_EVENT,
    DANGER_EVENT,
)
from tests.fixtures.core.engines import create_engine

__all__ = [
    "create_scenario",
    "create_historic_event",
    "QUIET_PHYSICS",
    "create_state",
    "create_spe",
    "create_notable_event",
    "INFO_EVENT",
    "DANGER_EVENT",
    "create_engine",
]
