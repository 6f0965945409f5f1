"""
Unit tests for the structuring pipeline — patterns, chunker, classifier,
extractors, full pipeline.
"""
from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.pipeline import structure
from app.pipeline.chunker import split_lines, split_sentences
from app.pipeline.classifier import LOOKAHEAD_LINES, classify
from app.pipeline.patterns import (
    match_amount,
    match_category,
    match_city,
    match_code,
    match_currency,
    match_level,
    match_notes,
    match_person,
    match_service,
    match_timestamp,
)
from app.pipeline.structurer import extract_event, extract_log
from app.schemas import DeclaredKind, Event, LogEvent, Schema

DIARY = (
    "2026-02-19 18:40 Jonas Petrauskas Vilnius paid 12.50 EUR for salad + coffee\n"
    "2026-02-19 20:10 Ieva Kazlauskaitė Kaunas paid 7 EUR bus ticket\n"
    "Bad line without structure\n"
    "2026-02-20 09:05 Jonas Petrauskas Vilnius paid 120 EUR rent February"
)

LOGS = (
    "2026-02-19 10:15:03 INFO AuthService User login success code=OK\n"
    "2026-02-19 10:16:11 WARN PaymentService Slow response code=SLOW_API\n"
    "2026-02-19 10:17:45 ERROR OrderService Failed to create order code=DB_ERR\n"
    "2026-02-19 10:18:02 DEBUG AuthService token=... code=TRACE"
)


# =====================================================================
# Patterns
# =====================================================================
class TestTimestamp:
    def test_minute_precision(self):
        assert match_timestamp("at 2026-02-19 18:40 ok") == datetime(2026, 2, 19, 18, 40)

    def test_second_precision_with_t(self):
        assert match_timestamp("2026-02-19T10:17:45 ERROR") == datetime(2026, 2, 19, 10, 17, 45)

    def test_first_occurrence_wins(self):
        ts = match_timestamp("2026-01-01 08:00 then 2026-01-02 09:00")
        assert ts == datetime(2026, 1, 1, 8, 0)

    def test_date_only_is_not_a_timestamp(self):
        assert match_timestamp("due 2026-02-19") is None

    def test_impossible_date(self):
        assert match_timestamp("2026-13-40 10:00") is None

    def test_minute_precision_reads_as_zero_seconds(self):
        assert match_timestamp("2026-02-19 18:40") == match_timestamp("2026-02-19 18:40:00")


class TestAmount:
    @pytest.mark.parametrize("text", ["12,50 EUR", "12.50 EUR", "paid 12.5eur", "12.50 €"])
    def test_separator_normalised(self, text):
        assert match_amount(text) == Decimal("12.50")

    def test_integer_amount(self):
        assert match_amount("paid 120 EUR rent") == Decimal("120.00")

    def test_word_code(self):
        assert match_amount("3 euros for bread") == Decimal("3.00")

    def test_requires_currency(self):
        assert match_amount("paid 12.50 for salad") is None

    def test_three_fraction_digits_rejected(self):
        assert match_amount("12.505 EUR") is None

    def test_overlong_literal_is_no_value(self):
        assert match_amount("paid 123456789012345678901234567 EUR") is None
        assert match_amount("paid 1234567890123456789012345678901,50 EUR") is None

    def test_currency(self):
        assert match_currency("7 eur") == "EUR"
        assert match_currency("seven") is None


class TestCity:
    def test_case_insensitive(self):
        assert match_city("landed in VILNIUS today") == "Vilnius"

    def test_accented(self):
        assert match_city("trip to Klaipėda") == "Klaipėda"

    def test_gazetteer_order_wins_over_position(self):
        assert match_city("Drove from Kaunas to Vilnius") == "Vilnius"

    def test_whole_word_only(self):
        assert match_city("Vilniusstreet") is None


class TestPerson:
    def test_two_tokens(self):
        assert match_person("2026-02-19 18:40 Jonas Petrauskas Vilnius") == "Jonas Petrauskas"

    def test_accented_letters(self):
        assert match_person("met Ieva Kazlauskaitė today") == "Ieva Kazlauskaitė"

    def test_single_token_rejected(self):
        assert match_person("Jonas paid 5 EUR") is None

    def test_all_caps_rejected(self):
        assert match_person("ERROR OrderService") is None


class TestCategory:
    def test_explicit_tag(self):
        assert match_category("paid 5 EUR | category = Groceries | notes: x") == "Groceries"

    def test_explicit_tag_beats_keywords(self):
        assert match_category("coffee, category=Work, meeting") == "Work"

    def test_keyword_table(self):
        assert match_category("bus ticket") == "Transport"
        assert match_category("rent February") == "Housing"

    def test_table_order_wins(self):
        assert match_category("taxi after coffee") == "Food"

    def test_no_match(self):
        assert match_category("Bad line without structure") is None


class TestNotes:
    def test_marker(self):
        assert match_notes("5 EUR | notes: for the cat") == "for the cat"
        assert match_notes("notes=remember receipt") == "remember receipt"

    def test_fallback_collapses_pipes(self):
        assert match_notes("a |  b|c") == "a b c"

    def test_marker_must_be_whole_word(self):
        assert match_notes("footnotes: see page 2") == "footnotes: see page 2"


class TestLogMatchers:
    def test_level_upper_cased(self):
        assert match_level("2026-02-19 warn slow") == "WARN"

    def test_level_whole_word(self):
        assert match_level("information only") is None

    def test_service(self):
        assert match_service("ERROR OrderService Failed") == "OrderService"
        assert match_service("ERROR Service Failed") is None

    def test_code(self):
        assert match_code("Failed code=DB_ERR") == "DB_ERR"
        assert match_code("code=HTTP:503-x trailing") == "HTTP:503-x"
        assert match_code("no code here") is None


# =====================================================================
# Chunker
# =====================================================================
class TestChunker:
    def test_lines_trimmed_and_non_empty(self):
        assert split_lines("  a \r\n\r\n b\n   \n") == ("a", "b")

    def test_sentences(self):
        assert split_sentences("First. Second! Third?\nFourth") == (
            "First", "Second", "Third", "Fourth",
        )

    def test_decimal_is_not_a_sentence_end(self):
        assert split_sentences("paid 12.50 EUR. Then left") == ("paid 12.50 EUR", "Then left")

    def test_blank(self):
        assert split_lines("  \n\t") == ()
        assert split_sentences("") == ()


# =====================================================================
# Classifier
# =====================================================================
class TestClassifier:
    def test_logs(self):
        assert classify(LOGS) is Schema.LOG

    def test_diary(self):
        assert classify(DIARY) is Schema.EVENT

    def test_needs_both_level_and_date(self):
        assert classify("2026-02-19 went to the shop") is Schema.EVENT
        assert classify("ERROR in my budget again") is Schema.EVENT

    def test_level_case_insensitive(self):
        assert classify("2026-02-19 error writing file") is Schema.LOG

    def test_lookahead_limit(self):
        """Only non-empty lines count towards the lookahead."""
        # a qualifying line past the 20-line lookahead is not seen
        filler = ["plain diary line"] * LOOKAHEAD_LINES
        log_line = "2026-02-19 10:17:45 ERROR OrderService boom"
        assert classify("\n".join(filler + [log_line])) is Schema.EVENT
        assert classify("\n".join(filler[:-1] + [log_line])) is Schema.LOG

    def test_blank_lines_do_not_use_up_lookahead(self):
        assert classify("\n" * 25 + "2026-02-19 10:17:45 ERROR OrderService boom") is Schema.LOG


# =====================================================================
# Extractors
# =====================================================================
class TestEventExtractor:
    def test_full_line(self):
        ev = extract_event(
            "2026-02-19 18:40 Jonas Petrauskas Vilnius paid 12.50 EUR for salad + coffee"
        )
        assert ev.event_timestamp == datetime(2026, 2, 19, 18, 40)
        assert ev.person == "Jonas Petrauskas"
        assert ev.city == "Vilnius"
        assert ev.amount == Decimal("12.50")
        assert ev.category == "Food"
        assert ev.parse_ok is True

    def test_noise_line_kept(self):
        ev = extract_event("Bad line without structure")
        assert ev.parse_ok is False
        assert ev.notes == "Bad line without structure"
        assert ev.source_line == "Bad line without structure"
        assert ev.event_timestamp is None
        assert ev.person is None
        assert ev.city is None
        assert ev.amount is None
        assert ev.category is None

    def test_notes_alone_is_not_parse_ok(self):
        assert extract_event("notes: call mum").parse_ok is False

    def test_single_field_is_parse_ok(self):
        assert extract_event("walked around Kaunas").parse_ok is True

    def test_records_are_immutable(self):
        ev = extract_event("walked around Kaunas")
        with pytest.raises(ValidationError):
            ev.city = "Vilnius"


class TestLogExtractor:
    def test_full_line(self):
        line = "2026-02-19 10:17:45 ERROR OrderService Failed to create order code=DB_ERR"
        log = extract_log(line)
        assert log.timestamp == datetime(2026, 2, 19, 10, 17, 45)
        assert log.level == "ERROR"
        assert log.service == "OrderService"
        assert log.code == "DB_ERR"
        assert log.message == line

    def test_unstructured_line_still_emitted(self):
        log = extract_log("stack trace continues here")
        assert log.message == "stack trace continues here"
        assert (log.timestamp, log.level, log.service, log.code) == (None, None, None, None)


# =====================================================================
# Full pipeline
# =====================================================================
class TestStructure:
    def test_diary_blob(self):
        result = structure(DIARY)
        assert result.record_schema is Schema.EVENT
        assert len(result.records) == 4
        assert all(isinstance(r, Event) for r in result.records)
        assert [r.parse_ok for r in result.records] == [True, True, False, True]
        assert result.records[1].person == "Ieva Kazlauskaitė"
        assert result.records[1].category == "Transport"
        assert result.records[3].amount == Decimal("120.00")

    def test_log_blob(self):
        result = structure(LOGS)
        assert result.record_schema is Schema.LOG
        assert len(result.records) == 4
        rec = result.records[2]
        assert isinstance(rec, LogEvent)
        assert rec.level == "ERROR"
        assert rec.service == "OrderService"
        assert rec.code == "DB_ERR"
        assert rec.message == LOGS.splitlines()[2]

    def test_one_log_line_forces_log_for_whole_blob(self):
        text = (
            "Had lunch with Jonas Petrauskas in Kaunas. It was nice!\n"
            "2026-02-19 10:17:45 ERROR OrderService Failed to create order code=DB_ERR"
        )
        result = structure(text)
        assert result.record_schema is Schema.LOG
        # line split only: the diary line keeps both sentences
        assert len(result.records) == 2
        assert result.records[0].message == "Had lunch with Jonas Petrauskas in Kaunas. It was nice!"
        assert result.records[0].level is None

    def test_record_count_matches_sentence_chunks(self):
        text = "Bought bread. Paid 3 EUR!\nBad line\n\n  Vilnius trip?"
        result = structure(text)
        assert len(result.records) == len(split_sentences(text)) == 4

    @pytest.mark.parametrize("text", ["", "   ", "\n\r\n\t"])
    def test_blank_input(self, text):
        result = structure(text)
        assert result.record_schema is Schema.EVENT
        assert result.records == []

    def test_log_hint_skips_classification(self):
        result = structure("just words. More words", DeclaredKind.LOG_HINT)
        assert result.record_schema is Schema.LOG
        assert [r.message for r in result.records] == ["just words. More words"]

    def test_event_hint_still_classified(self):
        assert structure(LOGS, DeclaredKind.EVENT_HINT).record_schema is Schema.LOG

    def test_idempotent(self):
        assert structure(DIARY) == structure(DIARY)
        assert structure(LOGS) == structure(LOGS)

    def test_overlong_amount_keeps_record(self):
        result = structure("paid 123456789012345678901234567 EUR for rent")
        assert len(result.records) == 1
        rec = result.records[0]
        assert rec.amount is None
        assert rec.category == "Housing"
        assert rec.parse_ok is True

        bare = structure("paid 123456789012345678901234567 EUR").records[0]
        assert bare.amount is None
        assert bare.parse_ok is False

    def test_non_string_is_usage_error(self):
        with pytest.raises(TypeError):
            structure(None)

    def test_serialises_schema_alias(self):
        dumped = structure(LOGS).model_dump(by_alias=True)
        assert dumped["schema"] == Schema.LOG
        assert len(dumped["records"]) == 4
