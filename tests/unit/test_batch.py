"""Unit tests for BatchParser."""

from unittest.mock import patch

from auction_invoices.batch.service import BatchParser
from auction_invoices.enrichment.memory_lookup import InMemorySoldItemLookup
from auction_invoices.shared.config import Settings


def test_results_keyed_in_submission_order(
    settings: Settings, unpaid_pickup_text: str, paid_shipping_text: str
) -> None:
    documents = {
        "b.txt": paid_shipping_text,
        "a.txt": unpaid_pickup_text,
        "c.txt": "not an invoice",
    }

    batch = BatchParser(settings).parse_documents(documents)

    assert list(batch.results) == ["b.txt", "a.txt", "c.txt"]
    assert batch.results["a.txt"].invoice.invoice_number == "16105"
    assert batch.results["b.txt"].invoice.invoice_number == "20417"
    assert batch.elapsed_seconds >= 0


def test_unsegmentable_document_does_not_stop_batch(
    settings: Settings, unpaid_pickup_text: str
) -> None:
    batch = BatchParser(settings).parse_documents(
        {"bad.txt": "no anchor here", "good.txt": unpaid_pickup_text}
    )

    assert batch.failed == ["bad.txt"]
    assert batch.needs_review == ["bad.txt"]
    assert batch.results["good.txt"].success is True


def test_enrichment_diagnostics_flag_review(
    settings: Settings, remaining_records: list[dict], unpaid_pickup_text: str
) -> None:
    lookup = InMemorySoldItemLookup(settings, remaining_records)

    batch = BatchParser(settings, lookup).parse_documents({"a.txt": unpaid_pickup_text})

    assert batch.failed == []
    assert batch.needs_review == ["a.txt"]
    assert batch.results["a.txt"].invoice.items[0].description == "Dewalt 20V cordless drill"


def test_expired_deadline_skips_enrichment_only(
    settings: Settings, remaining_records: list[dict], unpaid_pickup_text: str
) -> None:
    """Invoices still assemble; only the lookups are skipped."""
    lookup = InMemorySoldItemLookup(settings, remaining_records)

    batch = BatchParser(settings, lookup).parse_documents(
        {"a.txt": unpaid_pickup_text}, timeout_seconds=0
    )

    result = batch.results["a.txt"]
    assert result.success is True
    assert len(result.invoice.items) == 2
    assert all(item.description is None for item in result.invoice.items)
    assert [d.reason for d in result.diagnostics] == ["not enriched: deadline exceeded"] * 2


def test_worker_count_from_settings(unpaid_pickup_text: str) -> None:
    settings = Settings(_env_file=None, batch_max_workers=2)

    with patch("auction_invoices.batch.service.ThreadPoolExecutor") as executor_cls:
        executor = executor_cls.return_value.__enter__.return_value
        executor.submit.side_effect = lambda fn, *args: _Done(fn(*args))

        batch = BatchParser(settings).parse_documents({"a.txt": unpaid_pickup_text})

    executor_cls.assert_called_once_with(max_workers=2)
    assert batch.results["a.txt"].success is True


def test_empty_batch(settings: Settings) -> None:
    batch = BatchParser(settings).parse_documents({})

    assert batch.results == {}
    assert batch.failed == []


class _Done:
    """Completed future stand-in."""

    def __init__(self, value: object) -> None:
        self._value = value

    def result(self) -> object:
        return self._value
