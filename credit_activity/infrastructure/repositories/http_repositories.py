"""HTTP adapters for the trade booking system and confirmation store."""
from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Callable, Sequence

import requests

from credit_activity.domain.errors import TransportFault
from credit_activity.domain.models import ConfirmationRecord, DateRange, QuerySpec, RawActivityRecord
from credit_activity.domain.repositories import ConfirmationStore, TradeSystemClient

logger = logging.getLogger(__name__)


class ThreadLocalSessions:
    """Hands each calling thread its own ``requests.Session``.

    Planned queries run on worker threads and a Session is not guaranteed to be
    thread-safe. A session passed in explicitly is shared as-is; the caller is
    then responsible for it being safe across threads.
    """

    def __init__(
        self,
        shared: requests.Session | None = None,
        factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._shared = shared
        self._factory = factory
        self._local = threading.local()
        self._lock = threading.Lock()
        self._created: list[requests.Session] = []

    def get(self) -> requests.Session:
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._factory()
            self._local.session = session
            with self._lock:
                self._created.append(session)
        return session

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
        with self._lock:
            created, self._created = self._created, []
            self._local = threading.local()
        for session in created:
            session.close()


class HttpTradeSystemClient(TradeSystemClient):
    def __init__(
        self,
        endpoint: str,
        caller_id: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._endpoint = endpoint
        self._caller_id = caller_id
        self._timeout = timeout
        self._sessions = ThreadLocalSessions(session, session_factory)

    def query(
        self,
        status_filter: Sequence[str],
        customer_id: int,
        asset_class: str,
        date_range: DateRange | None = None,
    ) -> Sequence[RawActivityRecord]:
        request = QuerySpec(customer_id, asset_class, tuple(status_filter), date_range)
        payload: dict[str, Any] = {
            "callerId": self._caller_id,
            "statuses": list(status_filter),
            "customerId": customer_id,
            "assetClass": asset_class,
        }
        if date_range is not None:
            payload["startDate"] = date_range.start.isoformat()
            payload["endDate"] = date_range.end.isoformat()

        body = _post_json(self._sessions.get(), self._endpoint, payload, self._timeout, request)
        try:
            return [RawActivityRecord.from_mapping(item) for item in body["activities"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportFault(f"Malformed trade response from {self._endpoint}: {exc}", request) from exc

    def close(self) -> None:
        self._sessions.close()


class HttpConfirmationStore(ConfirmationStore):
    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._sessions = ThreadLocalSessions(session, session_factory)

    def lookup(self, institution_id: int, advance_numbers: Sequence[str]) -> Sequence[ConfirmationRecord]:
        payload = {"customerId": institution_id, "advanceNumbers": list(advance_numbers)}
        body = _post_json(self._sessions.get(), self._endpoint, payload, self._timeout, None)
        try:
            return [
                ConfirmationRecord(
                    confirmation_number=str(item["confirmationNumber"]),
                    confirmation_date=date.fromisoformat(str(item["confirmationDate"])[:10]),
                    advance_number=str(item["advanceNumber"]),
                    document_reference=str(item["documentReference"]),
                )
                for item in body["confirmations"]
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportFault(f"Malformed confirmation response from {self._endpoint}: {exc}") from exc

    def close(self) -> None:
        self._sessions.close()


def _post_json(
    session: requests.Session,
    endpoint: str,
    payload: dict[str, Any],
    timeout: float,
    request: QuerySpec | None,
) -> Any:
    try:
        response = session.post(endpoint, json=payload, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        logger.debug("Request to %s failed: %s", endpoint, exc)
        raise TransportFault(f"Request to {endpoint} failed: {exc}", request) from exc
    except ValueError as exc:
        raise TransportFault(f"Response from {endpoint} is not JSON", request) from exc
