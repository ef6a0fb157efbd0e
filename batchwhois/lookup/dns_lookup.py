"""DNS lookup backend.

A faster, rougher check than WHOIS: a domain with NS records (or any answer
short of NXDOMAIN) is treated as registered. Registered-but-undelegated
domains show up as available, so WHOIS remains the authoritative backend.
"""

import logging
from typing import Optional

from batchwhois.core.interfaces import LookupBackend, QueryResult
from batchwhois.utils.dns_utils import DNSUtils
from batchwhois.utils.validators import validate_domain


class DNSLookup(LookupBackend):
    """Looks up domains by querying their NS records."""

    def __init__(self, timeout: float = 3, dns_utils: Optional[DNSUtils] = None):
        self.dns_utils = dns_utils or DNSUtils(timeout=timeout)
        self.logger = logging.getLogger('batchwhois.dns_lookup')

    def lookup(self, domain: str) -> QueryResult:
        validate_domain(domain)

        nameservers = self.dns_utils.get_nameservers(domain)
        if nameservers is None:
            self.logger.debug(f"{domain} does not exist in DNS")
            return QueryResult(domain=domain, is_registered=False,
                               data={'nameservers': [], 'status': 'NXDOMAIN'})

        return QueryResult(domain=domain, is_registered=True,
                           data={'nameservers': nameservers, 'status': 'NOERROR'})
