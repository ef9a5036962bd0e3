"""Tests for the mailbox poller: scan semantics, failure isolation and the scan guard."""

import asyncio
import threading
import unittest

from fakes import FakeMailboxClient, fixed_extractor, raw_message
from rfp_desk.db.repositories import proposal_repo, rfp_repo, vendor_repo
from rfp_desk.ingestion.poller import BUSY_MESSAGE, NOT_CONFIGURED_MESSAGE, MailboxPoller
from rfp_desk.ingestion.proposal_builder import process_incoming_email


def _connected(client: FakeMailboxClient, **kwargs) -> MailboxPoller:
    poller = MailboxPoller(client, interval_seconds=3600, **kwargs)
    assert poller.connect()
    return poller


class TestDisabledPoller(unittest.TestCase):
    def test_no_client_reports_not_configured(self):
        poller = MailboxPoller(None)
        self.assertFalse(poller.connect())
        self.assertFalse(poller.enabled)
        result = asyncio.run(poller.check_now())
        self.assertFalse(result.success)
        self.assertEqual(result.message, NOT_CONFIGURED_MESSAGE)
        self.assertEqual(result.processed, 0)

    def test_failed_connect_disables_polling(self):
        poller = MailboxPoller(FakeMailboxClient(fail_connect=True))
        self.assertFalse(poller.connect())
        self.assertFalse(poller.enabled)
        self.assertFalse(poller.start())
        self.assertFalse(asyncio.run(poller.check_now()).success)


class TestScan(unittest.TestCase):
    def setUp(self):
        self.vendor = vendor_repo.insert("Acme", "sales@acme.com")
        self.rfp = rfp_repo.insert("Need 20 laptops", {"category": "Laptops"})

    def test_end_to_end_reply_becomes_proposal_and_is_flagged_seen(self):
        raw = raw_message("sales@acme.com", f"Re: RFP Request [{self.rfp.id}]", "Price: 1,40,500. Delivery: 10 days.")
        client = FakeMailboxClient({"7": raw})
        extract = fixed_extractor(price=140500.0, delivery_days=10, completeness=60)
        poller = _connected(client, process=lambda r: process_incoming_email(r, extract=extract))

        result = asyncio.run(poller.check_now())

        self.assertTrue(result.success)
        self.assertEqual(result.processed, 1)
        self.assertEqual(client.seen, {"7"})
        proposals = proposal_repo.list_all(rfp_id=self.rfp.id)
        self.assertEqual(len(proposals), 1)
        self.assertEqual(proposals[0].vendor_id, self.vendor.id)
        self.assertEqual(proposals[0].structured_proposal["price"], 140500.0)
        self.assertIn("1,40,500", extract.calls[0])

    def test_failing_message_does_not_abort_scan(self):
        good = raw_message("sales@acme.com", f"Re: [{self.rfp.id}]", "Price: 100")
        client = FakeMailboxClient({"1": "bad", "2": good})

        async def process(raw: str):
            if raw == "bad":
                raise RuntimeError("extraction failed")
            return await process_incoming_email(raw, extract=fixed_extractor(price=100.0))

        poller = _connected(client, process=process)
        result = asyncio.run(poller.check_now())

        self.assertTrue(result.success)
        self.assertEqual(result.processed, 1)
        # failed messages are still flagged seen and not retried
        self.assertEqual(client.seen, {"1", "2"})

    def test_unresolved_reply_is_flagged_seen_without_proposal(self):
        client = FakeMailboxClient({"3": raw_message("sales@acme.com", "Hello", "Any news?")})
        poller = _connected(client, process=lambda r: process_incoming_email(r, extract=fixed_extractor()))
        result = asyncio.run(poller.check_now())
        self.assertTrue(result.success)
        self.assertEqual(result.processed, 0)
        self.assertEqual(client.seen, {"3"})
        self.assertEqual(proposal_repo.list_all(), [])

    def test_fetch_failure_leaves_message_unseen(self):
        client = FakeMailboxClient({"4": "whatever"})
        client.fail_fetch.add("4")
        poller = _connected(client, process=fixed_extractor())
        result = asyncio.run(poller.check_now())
        self.assertTrue(result.success)
        self.assertEqual(client.seen, set())

    def test_seen_messages_are_not_rescanned(self):
        raw = raw_message("sales@acme.com", f"Re: [{self.rfp.id}]", "Price: 100")
        client = FakeMailboxClient({"5": raw})
        poller = _connected(client, process=lambda r: process_incoming_email(r, extract=fixed_extractor()))
        self.assertEqual(asyncio.run(poller.check_now()).processed, 1)
        self.assertEqual(asyncio.run(poller.check_now()).processed, 0)
        self.assertEqual(len(proposal_repo.list_all()), 1)

    def test_search_failure_is_reported(self):
        client = FakeMailboxClient()

        def broken_search():
            raise OSError("connection reset")

        client.search_unseen = broken_search
        poller = _connected(client)
        result = asyncio.run(poller.check_now())
        self.assertFalse(result.success)
        self.assertIn("connection reset", result.message)
        self.assertFalse(poller.scanning)
        self.assertFalse(client.locked)

    def test_mailbox_lock_is_taken_off_the_event_loop_thread(self):
        client = FakeMailboxClient({"1": "raw"})
        loop_threads = []

        async def process(raw: str):
            loop_threads.append(threading.get_ident())
            return None

        poller = _connected(client, process=process)
        asyncio.run(poller.check_now())

        self.assertEqual(len(client.lock_threads), 2)
        self.assertNotIn(loop_threads[0], client.lock_threads)
        self.assertFalse(client.locked)


class TestScanGuard(unittest.TestCase):
    def test_manual_check_during_scan_is_rejected(self):
        client = FakeMailboxClient({"1": "raw"})
        nested = []

        async def process(raw: str):
            nested.append(await poller.check_now())
            return None

        poller = _connected(client, process=process)
        result = asyncio.run(poller.check_now())

        self.assertTrue(result.success)
        self.assertEqual(len(nested), 1)
        self.assertFalse(nested[0].success)
        self.assertEqual(nested[0].message, BUSY_MESSAGE)
        self.assertEqual(client.lock_count, 1)

    def test_timer_tick_during_manual_scan_is_skipped(self):
        client = FakeMailboxClient({"1": "raw", "2": "raw"})
        calls = []

        async def process(raw: str):
            calls.append(raw)
            await poller._tick()
            return None

        poller = _connected(client, process=process)
        result = asyncio.run(poller.check_now())

        self.assertTrue(result.success)
        self.assertEqual(client.lock_count, 1)
        self.assertEqual(len(calls), 2)
        self.assertEqual(client.seen, {"1", "2"})
        self.assertFalse(poller.scanning)

    def test_timer_runs_first_scan_immediately_and_stops_cleanly(self):
        client = FakeMailboxClient({"1": "raw"})
        processed = []

        async def process(raw: str):
            processed.append(raw)
            return None

        poller = _connected(client, process=process)

        async def run():
            self.assertTrue(poller.start())
            for _ in range(50):
                if client.seen:
                    break
                await asyncio.sleep(0.01)
            await poller.stop()

        asyncio.run(run())
        self.assertEqual(processed, ["raw"])
        self.assertEqual(client.seen, {"1"})
        self.assertTrue(client.closed)
        self.assertFalse(poller.enabled)


if __name__ == "__main__":
    unittest.main()
