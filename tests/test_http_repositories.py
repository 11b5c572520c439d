import threading
from datetime import date, datetime
from decimal import Decimal

import pytest
import requests

from credit_activity.domain.errors import TransportFault
from credit_activity.domain.models import DateRange
from credit_activity.infrastructure.repositories.http_repositories import (
    HttpConfirmationStore,
    HttpTradeSystemClient,
    ThreadLocalSessions,
)


class FakeResponse:
    def __init__(self, body=None, status_code=200, error=None):
        self._body = body
        self.status_code = status_code
        self._error = error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._error is not None:
            raise self._error
        return self._body


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.posts = []
        self.closed = False

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


ACTIVITY = {
    "instrumentType": "ADVANCE",
    "status": "TERMINATED",
    "tradeDate": "2024-03-04T10:15:00",
    "fundingDate": "2024-03-04",
    "maturityDate": "",
    "tradeID": "123456",
    "amount": "5000000",
    "rate": "0.0275",
    "product": "ADVS",
    "subProduct": "FX CONSTANT",
    "terminationPar": "50000",
    "terminationFullPartial": "Full",
    "terminationDate": "03/04/2024",
}


def test_query_sends_filters_and_parses_activities():
    session = FakeSession(FakeResponse({"activities": [ACTIVITY]}))
    client = HttpTradeSystemClient("https://trade.example/activity", "WEB", timeout=5, session=session)

    records = client.query(["TERMINATED"], 750, "ADVS", DateRange(date(2024, 1, 1), date(2024, 3, 4)))

    url, payload, timeout = session.posts[0]
    assert url == "https://trade.example/activity"
    assert timeout == 5
    assert payload == {
        "callerId": "WEB",
        "statuses": ["TERMINATED"],
        "customerId": 750,
        "assetClass": "ADVS",
        "startDate": "2024-01-01",
        "endDate": "2024-03-04",
    }
    record = records[0]
    assert record.trade_date == datetime(2024, 3, 4, 10, 15)
    assert record.maturity_date is None
    assert record.termination_par == Decimal("50000")
    assert record.termination_date == date(2024, 3, 4)
    assert record.interest_rate == Decimal("0.0275")


def test_network_error_becomes_transport_fault():
    session = FakeSession(exc=requests.ConnectionError("refused"))
    client = HttpTradeSystemClient("https://trade.example/activity", "WEB", session=session)

    with pytest.raises(TransportFault) as info:
        client.query(["VERIFIED"], 750, "ADVS")
    assert info.value.query.statuses == ("VERIFIED",)


def test_http_error_becomes_transport_fault():
    session = FakeSession(FakeResponse(status_code=503))
    client = HttpTradeSystemClient("https://trade.example/activity", "WEB", session=session)

    with pytest.raises(TransportFault):
        client.query(["VERIFIED"], 750, "ADVS")


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse({"unexpected": []}),
        FakeResponse({"activities": [{"tradeID": "1", "status": "VERIFIED"}]}),
        FakeResponse(error=ValueError("no json")),
    ],
)
def test_malformed_response_becomes_transport_fault(response):
    client = HttpTradeSystemClient("https://trade.example/activity", "WEB", session=FakeSession(response))

    with pytest.raises(TransportFault):
        client.query(["VERIFIED"], 750, "ADVS")


def test_confirmation_lookup_parses_documents():
    body = {
        "confirmations": [
            {
                "confirmationNumber": 9001,
                "confirmationDate": "2024-02-28",
                "advanceNumber": "123456",
                "documentReference": "s3://confirmations/9001.pdf",
            }
        ]
    }
    session = FakeSession(FakeResponse(body))
    store = HttpConfirmationStore("https://docs.example/confirmations", session=session)

    confirmations = store.lookup(750, ["123456"])

    assert session.posts[0][1] == {"customerId": 750, "advanceNumbers": ["123456"]}
    assert confirmations[0].confirmation_number == "9001"
    assert confirmations[0].confirmation_date == date(2024, 2, 28)


def test_confirmation_store_fault():
    store = HttpConfirmationStore("https://docs.example/confirmations", session=FakeSession(exc=requests.Timeout()))

    with pytest.raises(TransportFault):
        store.lookup(750, ["123456"])


def test_each_thread_gets_its_own_session():
    created = []

    def factory():
        session = FakeSession()
        created.append(session)
        return session

    sessions = ThreadLocalSessions(factory=factory)
    main_session = sessions.get()
    assert sessions.get() is main_session

    seen = []
    workers = [threading.Thread(target=lambda: seen.append(sessions.get())) for _ in range(3)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert len(created) == 4
    assert len({id(session) for session in seen + [main_session]}) == 4

    sessions.close()
    assert all(session.closed for session in created)
    assert sessions.get() is not main_session


def test_explicit_session_is_shared_across_threads():
    shared = FakeSession()
    sessions = ThreadLocalSessions(shared)

    seen = []
    worker = threading.Thread(target=lambda: seen.append(sessions.get()))
    worker.start()
    worker.join()

    assert seen == [shared]
    assert sessions.get() is shared


def test_client_opens_session_per_worker_thread():
    created = []

    def factory():
        session = FakeSession(FakeResponse({"activities": [ACTIVITY]}))
        created.append(session)
        return session

    client = HttpTradeSystemClient("https://trades.example/api", "caller", session_factory=factory)
    assert created == []

    results = []
    workers = [
        threading.Thread(target=lambda: results.append(client.query(["TERMINATED"], 750, "ADVS")))
        for _ in range(2)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert len(results) == 2
    assert len(created) == 2
    assert all(len(session.posts) == 1 for session in created)

    client.close()
    assert all(session.closed for session in created)
