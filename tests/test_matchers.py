"""Tests for the ordered RFP identifier matchers."""

import unittest

from rfp_desk.correlation.matchers import ID_MATCHERS, first_match, regex_matcher
from rfp_desk.mail.parser import parse_raw_email

A = "11111111-2222-3333-4444-555555555555"
B = "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee"


def match(raw: str):
    return first_match(parse_raw_email(raw))


class TestFirstMatch(unittest.TestCase):
    def test_matcher_order(self):
        self.assertEqual(
            [name for name, _ in ID_MATCHERS],
            ["labeled_id", "subject_bracket", "subject_uuid", "body_uuid"],
        )

    def test_labeled_id_beats_subject_bracket(self):
        raw = f"Subject: Re: Quote [{B}]\n\nOur offer.\nRFP ID: {A}\n"
        self.assertEqual(match(raw), ("labeled_id", A))

    def test_subject_bracket(self):
        raw = f"From: v@x.com\nSubject: Re: Office chairs [{A}]\n\nPrice 500"
        self.assertEqual(match(raw), ("subject_bracket", A))

    def test_folded_subject_bracket(self):
        raw = (
            "From: v@x.com\r\n"
            "Subject: Re: Request for Proposal for fifty ergonomic office chairs with\r\n"
            f" lumbar support [{A}]\r\n"
            "\r\n"
            "Price 500\r\n"
        )
        self.assertEqual(match(raw), ("subject_bracket", A))

    def test_bare_uuid_in_subject(self):
        raw = f"Subject: Quote for {A}\n\nsee attached"
        self.assertEqual(match(raw), ("subject_uuid", A))

    def test_uuid_only_in_body(self):
        raw = f"Subject: Our quote\n\nReferencing request {A}, price 100."
        self.assertEqual(match(raw), ("body_uuid", A))

    def test_uuid_in_message_id_header_is_ignored(self):
        raw = (
            f"Message-ID: <{A}@acme.com>\n"
            f"In-Reply-To: <{B}@mail.example>\n"
            "From: v@x.com\n"
            "Subject: Re: Laptops quotation\n"
            "\n"
            "Price 100"
        )
        self.assertIsNone(match(raw))

    def test_case_insensitive_label_and_uppercase_id(self):
        raw = f"Subject: hi\n\nrfp id: {A.upper()}"
        self.assertEqual(match(raw), ("labeled_id", A.upper()))

    def test_no_identifier(self):
        self.assertIsNone(match("Subject: Re: Laptops quotation\n\nPrice: 100"))

    def test_custom_matcher_list(self):
        matchers = (("ticket", regex_matcher(r"TICKET-(\d+)", field="body")),)
        self.assertEqual(first_match(parse_raw_email("Subject: x\n\nsee ticket-42"), matchers), ("ticket", "42"))
        self.assertIsNone(first_match(parse_raw_email(f"Subject: x\n\nRFP ID: {A}"), matchers))


if __name__ == "__main__":
    unittest.main()
