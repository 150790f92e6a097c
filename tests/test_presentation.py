"""Tests for currency formatting and display rows."""

import pytest

from bill_splitter.config import CurrencySettings
from bill_splitter.formatting import format_idr, html_text, markdown_text, resolve_currency
from bill_splitter.ledger import LedgerStateManager, balance_rows, transaction_rows
from bill_splitter.ledger.presentation import (
    CUSTOM_SPLIT,
    PAYER_NOT_SPECIFIED,
    SPLIT_EQUALLY,
    UNTITLED,
)
from bill_splitter.models.ledger import Participant, Transaction


@pytest.fixture
def idr() -> CurrencySettings:
    return CurrencySettings(code="IDR", symbol="Rp", thousands_separator=".")


class TestFormatIdr:
    """Tests for Rupiah formatting."""

    @pytest.mark.parametrize("amount,expected", [
        (0, "Rp 0"),
        (15000, "Rp 15.000"),
        (1250000, "Rp 1.250.000"),
        (999.5, "Rp 1.000"),
        (12.4, "Rp 12"),
        (-2500, "-Rp 2.500"),
        (-0.4, "Rp 0"),
    ])
    def test_format(self, idr, amount, expected):
        """Test symbol, grouping and whole-rupiah rounding."""
        assert format_idr(amount, idr) == expected

    def test_non_finite_is_zero(self, idr):
        """Test that NaN and infinity render as zero."""
        assert format_idr(float("nan"), idr) == "Rp 0"
        assert format_idr(float("inf"), idr) == "Rp 0"

    def test_custom_currency(self):
        """Test formatting with other currency settings."""
        usd = CurrencySettings(code="usd", symbol="$", thousands_separator=",")
        assert usd.code == "USD"
        assert format_idr(1234567, usd) == "$ 1,234,567"


class TestDisplayRows:
    """Tests for balance and transaction rows."""

    def test_balance_rows(self, idr, alice_bob):
        """Test that balance rows pair names with formatted balances."""
        transactions = [
            Transaction(id="t1", amount="100000", payer="a", contributions={"a": "40000", "b": "60000"}),
        ]
        rows = balance_rows(alice_bob, transactions, idr)

        assert [(r.name, r.balance, r.formatted, r.is_positive) for r in rows] == [
            ("Alice", 60000.0, "Rp 60.000", True),
            ("Bob", -60000.0, "-Rp 60.000", False),
        ]

    def test_transaction_row_labels(self, idr, alice_bob):
        """Test the fallback title, payer name and split labels."""
        transactions = [
            Transaction(id="t1", title="Dinner", amount="90000", payer="b", is_split_bill=True),
            Transaction(id="t2", amount="abc"),
            Transaction(id="t3", title="Taxi", amount="20000", payer="gone"),
        ]
        rows = transaction_rows(alice_bob, transactions, idr)

        assert [r.transaction_id for r in rows] == ["t1", "t2", "t3"]
        assert (rows[0].title, rows[0].payer_name, rows[0].split_label) == (
            "Dinner", "Bob", SPLIT_EQUALLY,
        )
        assert rows[0].formatted_amount == "Rp 90.000"
        assert (rows[1].title, rows[1].payer_name, rows[1].split_label) == (
            UNTITLED, PAYER_NOT_SPECIFIED, CUSTOM_SPLIT,
        )
        assert rows[1].formatted_amount == "Rp 0"
        assert rows[2].payer_name == PAYER_NOT_SPECIFIED

    def test_no_transactions(self, idr):
        """Test rows for an empty ledger."""
        participants = [Participant(id="a", name="Alice")]
        assert transaction_rows(participants, [], idr) == []
        assert [r.formatted for r in balance_rows(participants, [], idr)] == ["Rp 0"]


class TestInvalidCurrencySettings:
    """Tests for formatting with a broken currency environment."""

    @pytest.fixture(autouse=True)
    def broken_separator(self, monkeypatch, event_logger):
        monkeypatch.setenv("BILL_SPLITTER_CURRENCY_THOUSANDS_SEPARATOR", "ab")
        monkeypatch.setattr("bill_splitter.formatting.EventLogger", lambda: event_logger)

    def test_falls_back_to_rupiah(self, recording_logger):
        """Test that invalid settings format with the defaults and warn."""
        assert format_idr(1500) == "Rp 1.500"

        assert recording_logger.event_types() == ["settings_invalid"]
        _, _, context = recording_logger.records[0]
        assert context["entity_id"] == "currency"

    def test_explicit_currency_skips_environment(self, idr, recording_logger):
        """Test that passed-in settings are used without reading the environment."""
        assert resolve_currency(idr) is idr
        assert recording_logger.records == []

    def test_summary_rows_still_render(self, alice_bob, recording_logger):
        """Test that the balance summary renders with a broken environment."""
        ledger = LedgerStateManager(participants=alice_bob)
        assert [r.formatted for r in ledger.balance_rows()] == ["Rp 0", "Rp 0"]
        assert ledger.transaction_rows() == []
        assert recording_logger.event_types().count("settings_invalid") == 2


class TestEscaping:
    """Tests for escaping user text on the page."""

    @pytest.mark.parametrize("raw,expected", [
        ("Tom <3 Jerry", "Tom &lt;3 Jerry"),
        ("a</div><div style='color:red'>", "a&lt;/div&gt;&lt;div style=&#x27;color:red&#x27;&gt;"),
        ('Bob "B" & Co', "Bob &quot;B&quot; &amp; Co"),
        ("Alice", "Alice"),
    ])
    def test_html_text(self, raw, expected):
        """Test that names cannot inject markup into HTML rows."""
        assert html_text(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("**Dinner**", r"\*\*Dinner\*\*"),
        ("Taxi $5 to $10", r"Taxi \$5 to \$10"),
        ("<b>x</b>", r"\<b\>x\</b\>"),
        ("[link](http)", r"\[link\]\(http\)"),
        ("Lunch", "Lunch"),
    ])
    def test_markdown_text(self, raw, expected):
        """Test that titles and labels are shown literally."""
        assert markdown_text(raw) == expected
