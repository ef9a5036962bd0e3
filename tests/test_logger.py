"""Logger helpers: bound names, agent steps and per-task context."""

import unittest

import structlog
from structlog.testing import capture_logs

from rfp_desk.utils.logger import bind_context, get_logger, log_agent_step, unbind_context


class TestLogger(unittest.TestCase):
    def tearDown(self):
        structlog.contextvars.clear_contextvars()

    def test_bindings_are_carried_on_each_entry(self):
        with capture_logs() as logs:
            get_logger("rfp_desk.tests", uid="7").info("poller.empty_source")
        self.assertEqual(logs[0]["event"], "poller.empty_source")
        self.assertEqual(logs[0]["uid"], "7")
        self.assertEqual(logs[0]["log_level"], "info")

    def test_agent_step_without_data(self):
        with capture_logs() as logs:
            log_agent_step("proposal_agent", "extract.start")
        self.assertEqual(logs, [{"agent": "proposal_agent", "event": "extract.start", "log_level": "info"}])

    def test_agent_step_with_data(self):
        with capture_logs() as logs:
            log_agent_step("proposal_agent", "extract.done", data={"completeness": 80})
        self.assertEqual(logs[0]["data"], {"completeness": 80})
        self.assertEqual(logs[0]["agent"], "proposal_agent")

    def test_bind_and_unbind_context(self):
        bind_context(scan_trigger="manual")
        self.assertEqual(structlog.contextvars.get_contextvars(), {"scan_trigger": "manual"})
        unbind_context("scan_trigger")
        self.assertEqual(structlog.contextvars.get_contextvars(), {})
