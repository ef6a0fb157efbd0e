"""
Pytest configuration file for batchwhois tests.
"""
import os
import sys
import threading
import pytest

# Add the parent directory to sys.path to allow importing batchwhois
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from batchwhois.core.interfaces import LookupBackend, PositionSpec, QueryResult


class FakeBackend(LookupBackend):
    """In-memory backend recording every lookup it receives."""

    def __init__(self, registered=(), failing=()):
        self.registered = set(registered)
        self.failing = set(failing)
        self.calls = []
        self._lock = threading.Lock()

    def lookup(self, domain):
        with self._lock:
            self.calls.append(domain)
        if domain in self.failing:
            raise RuntimeError(f"lookup failed for {domain}")
        return QueryResult(domain=domain, is_registered=domain in self.registered,
                           data={'source': 'fake'})


@pytest.fixture
def fake_backend():
    """Return a backend where 11.com is registered and 22.com fails."""
    return FakeBackend(registered={"11.com"}, failing={"22.com"})


@pytest.fixture
def two_digits():
    """Return two digit positions."""
    return [PositionSpec.digit(), PositionSpec.digit()]


@pytest.fixture
def sample_results():
    """Return a mix of available, registered and failed results."""
    return [
        QueryResult(domain="alpha.com", is_registered=False, data={}),
        QueryResult(domain="Beta.com", is_registered=True, data={"Registration Time": "2020-01-01"}),
        QueryResult(domain="gamma.com", error="Timeout connecting"),
        QueryResult(domain="alphabet.com", is_registered=False, data={}),
    ]


@pytest.fixture
def mock_whois_response():
    """Return a WHOIS API payload for a registered domain."""
    return {
        "code": 200,
        "msg": "ok",
        "data": {
            "Domain Name": "example.com",
            "Registration Time": "1995-08-14 04:00:00",
            "Registrar": "RESERVED-Internet Assigned Numbers Authority",
        }
    }
