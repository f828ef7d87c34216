"""Unit tests for raw record parsing."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gmail_fixture_builder.exceptions import ParseError
from gmail_fixture_builder.source.parsing import (
    clean_exchange_address,
    parse_address_list,
    parse_date,
    parse_record,
    parse_record_file,
    split_headers,
)

SAMPLE = (
    "Message-ID: <18782981.1075855378110.JavaMail.evans@thyme>\n"
    "Date: Mon, 14 May 2001 16:39:00 -0700 (PDT)\n"
    "From: phillip.allen@enron.com\n"
    "To: tim.belden@enron.com,\n"
    "\tjohn.lavorato@enron.com\n"
    "Subject: Forecast for\n"
    " next week\n"
    "Mime-Version: 1.0\n"
    "X-From: Phillip K Allen </O=ENRON/OU=NA/CN=RECIPIENTS/CN=PALLEN>\n"
    "X-Folder: \\Phillip_Allen_Jan2002_1\\Allen, Phillip K.\\'Sent Mail\n"
    "X-FileName: pallen (Non-Privileged).pst\n"
    "\n"
    "Here is our forecast\n"
    "\n"
    "Thanks\n"
)


class TestSplitHeaders:
    """Test suite for header/body splitting."""

    def test_continuation_lines_are_folded_with_single_space(self) -> None:
        headers, _ = split_headers(SAMPLE)
        values = dict(headers)

        assert values["To"] == "tim.belden@enron.com, john.lavorato@enron.com"
        assert values["Subject"] == "Forecast for next week"

    def test_body_starts_after_first_blank_line(self) -> None:
        _, body = split_headers(SAMPLE)

        assert body == "Here is our forecast\n\nThanks\n"


class TestParseRecord:
    """Test suite for parse_record."""

    def test_parses_typed_fields(self) -> None:
        record = parse_record(SAMPLE.encode("utf-8"), origin_folder="sent_items", origin_filename="1.")

        assert record.message_id == "<18782981.1075855378110.JavaMail.evans@thyme>"
        assert record.sender == "phillip.allen@enron.com"
        assert record.to == ["tim.belden@enron.com", "john.lavorato@enron.com"]
        assert record.subject == "Forecast for next week"
        assert record.x_from == "Phillip K Allen"
        assert record.x_filename == "pallen (Non-Privileged).pst"
        assert record.origin_folder == "sent_items"
        assert record.origin_filename == "1."
        assert record.date_fallback is False
        assert record.date == datetime(2001, 5, 14, 23, 39, tzinfo=timezone.utc)

    def test_unrecognized_headers_are_dropped(self) -> None:
        record = parse_record(SAMPLE.encode("utf-8"))

        assert "Mime-Version" not in record.model_dump_json()

    def test_unparseable_date_falls_back_to_clock(self, fixed_now: datetime) -> None:
        data = SAMPLE.replace("Mon, 14 May 2001 16:39:00 -0700 (PDT)", "sometime last spring")

        record = parse_record(data.encode("utf-8"), clock=lambda: fixed_now)

        assert record.date == fixed_now
        assert record.date_fallback is True

    def test_missing_date_falls_back_to_clock(self, fixed_now: datetime) -> None:
        data = SAMPLE.replace("Date: Mon, 14 May 2001 16:39:00 -0700 (PDT)\n", "")

        record = parse_record(data.encode("utf-8"), clock=lambda: fixed_now)

        assert record.date == fixed_now
        assert record.date_fallback is True

    def test_strict_dates_rejects_unparseable_date(self) -> None:
        data = SAMPLE.replace("Mon, 14 May 2001 16:39:00 -0700 (PDT)", "not a date")

        with pytest.raises(ParseError):
            parse_record(data.encode("utf-8"), strict_dates=True)

    def test_missing_message_id_raises(self) -> None:
        data = SAMPLE.replace("Message-ID: <18782981.1075855378110.JavaMail.evans@thyme>\n", "")

        with pytest.raises(ParseError):
            parse_record(data.encode("utf-8"))

    def test_empty_file_raises(self) -> None:
        with pytest.raises(ParseError):
            parse_record(b"")

    def test_invalid_utf8_is_replaced(self) -> None:
        data = SAMPLE.encode("utf-8") + b"caf\xe9\n"

        record = parse_record(data)

        assert record.body.endswith("caf\ufffd\n")

    def test_parse_record_file_reports_unreadable_path(self, tmp_path) -> None:
        with pytest.raises(ParseError):
            parse_record_file(tmp_path / "missing")


class TestParseDate:
    """Test suite for the ordered date formats."""

    def test_rfc2822_with_zone_comment(self) -> None:
        parsed = parse_date("Mon, 14 May 2001 16:39:00 -0700 (PDT)")

        assert parsed == datetime(2001, 5, 14, 16, 39, tzinfo=timezone(timedelta(hours=-7)))

    def test_without_weekday(self) -> None:
        parsed = parse_date("2 Jan 2001 10:00:00 +0000")

        assert parsed == datetime(2001, 1, 2, 10, 0, tzinfo=timezone.utc)

    def test_gmt_zone_name(self) -> None:
        parsed = parse_date("Tue, 2 Jan 2001 10:00:00 GMT")

        assert parsed == datetime(2001, 1, 2, 10, 0, tzinfo=timezone.utc)

    def test_named_us_zone_keeps_offset(self) -> None:
        parsed = parse_date("Mon, 14 May 2001 16:39:00 PDT")

        assert parsed == datetime(2001, 5, 14, 16, 39, tzinfo=timezone(timedelta(hours=-7)))
        assert parsed.utcoffset() == timedelta(hours=-7)

    def test_named_zone_single_digit_day(self) -> None:
        parsed = parse_date("Fri, 2 Mar 2001 09:15:00 EST")

        assert parsed == datetime(2001, 3, 2, 14, 15, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(hours=-5)

    def test_named_zone_without_weekday(self) -> None:
        parsed = parse_date("14 May 2001 16:39:00 GMT")

        assert parsed == datetime(2001, 5, 14, 16, 39, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_named_zone_record_keeps_header_date(self) -> None:
        data = (
            "Message-ID: <1.named.zone@thyme>\n"
            "Date: Mon, 14 May 2001 16:39:00 PDT\n"
            "From: a@enron.com\n"
            "\n"
            "body\n"
        ).encode()

        record = parse_record(data, clock=lambda: datetime(2030, 1, 1, tzinfo=timezone.utc))

        assert record.date_fallback is False
        assert record.date == datetime(2001, 5, 14, 23, 39, tzinfo=timezone.utc)

    def test_naive_value_is_utc(self) -> None:
        parsed = parse_date("Tue, 2 Jan 2001 10:00:00")

        assert parsed is not None
        assert parsed.tzinfo is timezone.utc

    def test_garbage_returns_none(self) -> None:
        assert parse_date("yesterday-ish") is None


def test_parse_address_list_discards_empty_entries() -> None:
    assert parse_address_list(" a@enron.com, , b@enron.com ,") == ["a@enron.com", "b@enron.com"]
    assert parse_address_list(None) == []


def test_clean_exchange_address_strips_suffix() -> None:
    assert clean_exchange_address("Vince J Kaminski </O=ENRON/OU=NA/CN=VKAMINS>") == "Vince J Kaminski"
    assert clean_exchange_address("vince.kaminski@enron.com") == "vince.kaminski@enron.com"
