"""Tests for the HTTP API: resources, error mapping and the manual reply check."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from fakes import FakeMailboxClient, fixed_extractor, raw_message
from rfp_desk.api.server import create_app
from rfp_desk.db.repositories import email_record_repo, proposal_repo, rfp_repo, vendor_repo
from rfp_desk.ingestion.poller import MailboxPoller
from rfp_desk.ingestion.proposal_builder import process_incoming_email
from rfp_desk.mail.smtp_sender import SmtpSender
from rfp_desk.models.rfp import RfpStructure

MISSING_ID = "00000000-0000-0000-0000-000000000000"


class TestVendorAndRfpRoutes(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(start_poller=False))

    def test_health(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok", "mail_polling": False})

    def test_vendor_crud_and_conflict(self):
        r = self.client.post("/vendors", json={"name": "Acme", "email": "Sales@Acme.com"})
        self.assertEqual(r.status_code, 201)
        vendor = r.json()
        self.assertEqual(vendor["email"], "sales@acme.com")

        r = self.client.post("/vendors", json={"name": "Dup", "email": "sales@acme.com"})
        self.assertEqual(r.status_code, 409)

        r = self.client.patch(f"/vendors/{vendor['id']}", json={"name": "Acme Ltd"})
        self.assertEqual(r.json()["name"], "Acme Ltd")
        self.assertEqual([v["name"] for v in self.client.get("/vendors").json()], ["Acme Ltd"])

        self.assertEqual(self.client.delete(f"/vendors/{vendor['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/vendors/{vendor['id']}").status_code, 404)

    def test_invalid_vendor_email(self):
        r = self.client.post("/vendors", json={"name": "Acme", "email": "nope"})
        self.assertEqual(r.status_code, 400)

    def test_create_rfp_and_vague_rejection(self):
        async def good(description: str) -> RfpStructure:
            return RfpStructure(budget=1000, category="Laptops")

        async def vague(description: str) -> RfpStructure:
            return RfpStructure()

        with patch("rfp_desk.services.rfp_service.generate_structured_rfp", good):
            r = self.client.post("/rfps", json={"description": "Laptops for 1000"})
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["structured_data"]["category"], "Laptops")

        with patch("rfp_desk.services.rfp_service.generate_structured_rfp", vague):
            r = self.client.post("/rfps", json={"description": "something"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(len(self.client.get("/rfps").json()), 1)

    def test_missing_rfp(self):
        self.assertEqual(self.client.get(f"/rfps/{MISSING_ID}").status_code, 404)
        self.assertEqual(self.client.get(f"/proposals/rfp/{MISSING_ID}").status_code, 404)
        self.assertEqual(self.client.get(f"/email/sent/rfp/{MISSING_ID}").status_code, 404)

    def test_email_preview(self):
        rfp = rfp_repo.insert("Need chairs", {"category": "Chairs", "warranty": "2 years"})

        async def subject(description: str) -> str:
            return "Chairs RFP"

        with patch("rfp_desk.services.outreach_service.generate_email_subject", subject):
            r = self.client.get(f"/rfps/{rfp.id}/email-preview")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["subject"], f"Chairs RFP [{rfp.id}]")
        self.assertIn("Warranty Requirements: 2 years", body["text"])
        self.assertIn(f"RFP ID: {rfp.id}", body["text"])

    def test_send_without_smtp_credentials_is_unavailable(self):
        rfp = rfp_repo.insert("Need chairs", {"category": "Chairs"})
        vendor = vendor_repo.insert("Acme", "sales@acme.com")

        with patch(
            "rfp_desk.services.outreach_service.SmtpSender",
            lambda: SmtpSender(host="smtp.example.com", user="", password=""),
        ):
            r = self.client.post(f"/rfps/{rfp.id}/send", json={"vendor_ids": [vendor.id]})
        self.assertEqual(r.status_code, 503)
        self.assertIn("SMTP", r.json()["detail"])
        self.assertEqual(email_record_repo.list_all(), [])


class TestProposalRoutes(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(start_poller=False))
        self.vendor = vendor_repo.insert("Acme", "sales@acme.com")
        self.rfp = rfp_repo.insert("Need 20 laptops", {"category": "Laptops"})

    def test_list_get_and_patch(self):
        proposal = proposal_repo.insert(self.vendor.id, self.rfp.id, "Price 100", {"price": 100}, score=40)

        listed = self.client.get(f"/proposals/rfp/{self.rfp.id}").json()
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0]["vendor"]["email"], "sales@acme.com")

        r = self.client.patch(f"/proposals/{proposal.id}", json={"score": 75, "ai_summary": "solid"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["score"], 75)
        self.assertEqual(r.json()["structured_proposal"], {"price": 100})

        self.assertEqual(self.client.get(f"/proposals/{MISSING_ID}").status_code, 404)

    def test_compare_without_proposals(self):
        r = self.client.get(f"/proposals/rfp/{self.rfp.id}/compare")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["summary"], "No proposals found for this RFP")


class TestEmailRoutes(unittest.TestCase):
    def test_check_replies_without_imap(self):
        client = TestClient(create_app(start_poller=False))
        body = client.post("/email/check-replies").json()
        self.assertFalse(body["success"])
        self.assertEqual(body["processed"], 0)

    def test_check_replies_ingests_unseen_reply(self):
        vendor_repo.insert("Acme", "sales@acme.com")
        rfp = rfp_repo.insert("Need 20 laptops", {"category": "Laptops"})
        mailbox = FakeMailboxClient({"9": raw_message("sales@acme.com", f"Re: [{rfp.id}]", "Price: 500")})
        extract = fixed_extractor(price=500.0)
        poller = MailboxPoller(mailbox, process=lambda raw: process_incoming_email(raw, extract=extract))
        poller.connect()
        client = TestClient(create_app(poller=poller, start_poller=False))

        body = client.post("/email/check-replies").json()

        self.assertTrue(body["success"])
        self.assertEqual(body["processed"], 1)
        self.assertEqual(mailbox.seen, {"9"})
        self.assertEqual(len(client.get("/proposals").json()), 1)
        self.assertTrue(client.get("/health").json()["mail_polling"])


if __name__ == "__main__":
    unittest.main()
