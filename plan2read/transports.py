import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from plan2read.actions import READ_ACTIONS, LocalBackend
from plan2read.config import settings
from plan2read.errors import TransportError

logger = logging.getLogger(__name__)


def get_transport() -> "Transport":
    """Factory function to return the transport selected in config"""
    if settings.transport.lower() == "http":
        if not settings.apps_script_url.startswith("http"):
            raise ValueError("PLAN2READ_APPS_SCRIPT_URL must be set when transport is 'http'")
        return HttpTransport(settings.apps_script_url, timeout=settings.request_timeout)
    return LocalTransport(LocalBackend(settings.database_url))


class Transport(ABC):
    """Carries one action envelope to the backend and returns its raw response"""

    @abstractmethod
    def send(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deliver ``{action, **payload}`` and return the decoded response envelope.

        Raises:
            TransportError: the backend could not be reached or answered garbage
        """


class HttpTransport(Transport):
    """
    Talks to the deployed web app.

    Read-only actions go out as GET with the fields as query parameters;
    everything else is a POST whose body is the JSON envelope sent as
    text/plain, which is what the deployed endpoint parses.
    """

    def __init__(self, url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        envelope = {**payload, "action": action}
        try:
            if action in READ_ACTIONS:
                resp = self.session.get(self.url, params=envelope, timeout=self.timeout)
            else:
                resp = self.session.post(
                    self.url,
                    data=json.dumps(envelope),
                    headers={"Content-Type": "text/plain;charset=utf-8"},
                    timeout=self.timeout,
                )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Request %s failed: %s", action, e)
            raise TransportError(f"Backend unreachable: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(f"Malformed response to {action}") from e
        if not isinstance(body, dict):
            raise TransportError(f"Malformed response to {action}")
        return body


class LocalTransport(Transport):
    """Hands envelopes to the in-process simulated backend"""

    def __init__(self, backend: Optional[LocalBackend] = None):
        self.backend = backend or LocalBackend()

    def send(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.backend.handle(action, dict(payload))
