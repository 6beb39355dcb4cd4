"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides fact builders shared by the test modules.
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of cronshift modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("cronshift"):
        del sys.modules[module_name]

from cronshift.facts.models import ScheduleFact, TimerFact, TimerPattern  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Keep log configuration and bound context from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def single_timer() -> TimerFact:
    """A startup-created single-action timer with nothing escaping."""
    return TimerFact(timer_pattern=TimerPattern.SINGLE, has_single_timer=True)


@pytest.fixture
def nightly_schedule() -> ScheduleFact:
    """Every day at 02:00:00."""
    return ScheduleFact(second="0", minute="0", hour="2")


@pytest.fixture
def facts_document() -> str:
    """Fact document with one unit per verdict kind."""
    return """\
units:
  - name: com.example.billing.NightlyInvoiceTimer
    timer:
      timerPattern: single
      hasSingleTimer: true
      usesTimerInfo: true
    schedule:
      second: "0"
      minute: "0"
      hour: "2"
      info: invoices
  - name: com.example.audit.AuditPurgeTimer
    timer:
      timerPattern: interval
      hasIntervalTimer: true
      timeoutMethodCount: 1
  - name: com.example.ops.HandleKeeper
    timer:
      usesTimerHandle: true
      timerHandleEscapes: true
"""
