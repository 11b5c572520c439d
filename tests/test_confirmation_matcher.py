from datetime import date

from credit_activity.domain.classification import ActivityClassifier
from credit_activity.domain.confirmations import ConfirmationMatcher
from credit_activity.domain.models import ConfirmationRecord

from factories import TODAY, make_raw


def make_confirmation(advance_number: str, number: str) -> ConfirmationRecord:
    return ConfirmationRecord(
        confirmation_number=number,
        confirmation_date=date(2024, 2, 20),
        advance_number=advance_number,
        document_reference=f"docs/{number}.pdf",
    )


class RecordingStore:
    def __init__(self, confirmations):
        self.confirmations = confirmations
        self.calls = []

    def lookup(self, institution_id, advance_numbers):
        self.calls.append((institution_id, list(advance_numbers)))
        return [c for c in self.confirmations if c.advance_number in advance_numbers]


def classify(*advance_numbers):
    classifier = ActivityClassifier(TODAY)
    return [classifier.classify(make_raw(advance_number=number)) for number in advance_numbers]


def test_confirmations_attach_by_advance_number():
    store = RecordingStore([make_confirmation("1", "9001"), make_confirmation("1", "9002"), make_confirmation("2", "9003")])
    matcher = ConfirmationMatcher(store)

    matched = matcher.match(750, classify("1", "2", "3"))

    assert [c.confirmation_number for c in matched[0].confirmations] == ["9001", "9002"]
    assert [c.confirmation_number for c in matched[1].confirmations] == ["9003"]
    assert matched[2].confirmations == ()
    for record in matched:
        assert all(c.advance_number == record.advance_number for c in record.confirmations)


def test_lookup_is_batched_over_distinct_advances():
    store = RecordingStore([])
    ConfirmationMatcher(store).match(750, classify("1", "2", "1"))

    assert store.calls == [(750, ["1", "2"])]


def test_empty_feed_skips_lookup():
    store = RecordingStore([])

    assert ConfirmationMatcher(store).match(750, []) == []
    assert store.calls == []


def test_confirmation_for_unknown_advance_is_dropped():
    matcher = ConfirmationMatcher(RecordingStore([]))

    attached = matcher.attach(classify("1"), [make_confirmation("42", "9001")])

    assert attached[0].confirmations == ()


def test_find_single_confirmation():
    store = RecordingStore([make_confirmation("1", "9001"), make_confirmation("1", "9002")])
    matcher = ConfirmationMatcher(store)

    assert matcher.find(750, "1", "9002").document_reference == "docs/9002.pdf"
    assert matcher.find(750, "1", 9001).confirmation_number == "9001"
    assert matcher.find(750, "1", "1234") is None
