"""WHOIS lookup backend.

Queries a WHOIS JSON API of the form ``GET <url>?domain=<domain>`` answering
``{"code": 200, "msg": "...", "data": {...}}``. A domain counts as registered
when its record carries a registration time.
"""

import logging
from typing import Optional

from batchwhois.core.exceptions import APIError, QueryError
from batchwhois.core.interfaces import LookupBackend, QueryResult
from batchwhois.utils.http_utils import HTTPUtils
from batchwhois.utils.validators import validate_domain

DEFAULT_WHOIS_URL = "https://v2.xxapi.cn/api/whois"
REGISTRATION_FIELD = "Registration Time"


class WhoisLookup(LookupBackend):
    """Looks up domains through a WHOIS HTTP API."""

    def __init__(self, base_url: str = DEFAULT_WHOIS_URL, timeout: float = 10,
                 http_utils: Optional[HTTPUtils] = None):
        """Initialize the WHOIS backend.
        
        Args:
            base_url: WHOIS API endpoint
            timeout: Per-request timeout in seconds
            http_utils: Optional preconfigured HTTP helper
        """
        self.base_url = base_url
        self.http_utils = http_utils or HTTPUtils(timeout=timeout)
        self.logger = logging.getLogger('batchwhois.whois_lookup')

    def lookup(self, domain: str) -> QueryResult:
        """Look up a domain's WHOIS record.
        
        Args:
            domain: Fully-qualified domain name
            
        Returns:
            QueryResult with the WHOIS record as data
            
        Raises:
            ValidationError: If the domain is malformed
            NetworkError: If the API cannot be reached
            APIError: If the API answers with an error code
            QueryError: If a successful answer carries no WHOIS record
        """
        validate_domain(domain)

        self.logger.debug(f"Querying WHOIS for {domain}")
        payload = self.http_utils.get_json(self.base_url, params={'domain': domain})

        if not isinstance(payload, dict):
            raise APIError(f"Unexpected WHOIS response for {domain}")

        if payload.get('code') != 200:
            raise APIError(payload.get('msg') or f"WHOIS query failed for {domain}")

        data = payload.get('data')
        if not data or not isinstance(data, dict):
            raise QueryError(f"WHOIS response for {domain} carries no record")

        is_registered = bool(data.get(REGISTRATION_FIELD))
        return QueryResult(domain=domain, is_registered=is_registered, data=data)
