"""
Unit tests for DNS utilities.
"""
import pytest
from unittest.mock import patch, MagicMock
from dns.resolver import NXDOMAIN, NoAnswer, Timeout, NoNameservers

from batchwhois.utils.dns_utils import DNSUtils
from batchwhois.core.exceptions import NetworkError


class TestDNSUtils:
    """Test DNS utility functions."""

    @patch('batchwhois.utils.dns_utils.Resolver')
    def test_init(self, mock_resolver):
        """Timeouts and custom nameservers are applied to the resolver."""
        dns_utils = DNSUtils(timeout=2, nameservers=["1.1.1.1"])
        resolver = mock_resolver.return_value
        assert dns_utils.resolver is resolver
        assert resolver.timeout == 2
        assert resolver.lifetime == 2
        assert resolver.nameservers == ["1.1.1.1"]

    @patch('batchwhois.utils.dns_utils.Resolver')
    def test_get_nameservers(self, mock_resolver):
        """NS answers are returned sorted without trailing dots."""
        answers = []
        for name in ("b.iana-servers.net.", "a.iana-servers.net."):
            answer = MagicMock()
            answer.to_text.return_value = name
            answers.append(answer)
        mock_resolver.return_value.resolve.return_value = answers

        nameservers = DNSUtils().get_nameservers("example.com")

        assert nameservers == ["a.iana-servers.net", "b.iana-servers.net"]
        mock_resolver.return_value.resolve.assert_called_once_with("example.com", 'NS')

    @patch('batchwhois.utils.dns_utils.Resolver')
    def test_nxdomain(self, mock_resolver):
        """NXDOMAIN means the domain does not exist."""
        mock_resolver.return_value.resolve.side_effect = NXDOMAIN()
        assert DNSUtils().get_nameservers("free-domain.com") is None

    @patch('batchwhois.utils.dns_utils.Resolver')
    def test_no_answer(self, mock_resolver):
        """An existing domain without NS records yields an empty list."""
        mock_resolver.return_value.resolve.side_effect = NoAnswer()
        assert DNSUtils().get_nameservers("example.com") == []

    @pytest.mark.parametrize("error", [Timeout(), NoNameservers()])
    @patch('batchwhois.utils.dns_utils.Resolver')
    def test_network_failures(self, mock_resolver, error):
        """Unanswered queries raise network errors."""
        mock_resolver.return_value.resolve.side_effect = error
        with pytest.raises(NetworkError):
            DNSUtils().get_nameservers("example.com")
