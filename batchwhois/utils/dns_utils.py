"""DNS utility functions for batchwhois.

Used by the DNS lookup backend to decide whether a domain is delegated.
A registered domain normally has NS records at its zone apex; NXDOMAIN from
the registry means nobody holds it.
"""

import logging
from typing import List, Optional

import dns.exception
from dns.resolver import NXDOMAIN, NoAnswer, NoNameservers, Resolver, Timeout

from batchwhois.core.exceptions import NetworkError


class DNSUtils:
    """DNS helpers for domain delegation checks.
    
    Attributes:
        timeout: DNS query timeout in seconds
        logger: Logger instance for this class
        resolver: DNS resolver instance
    """

    def __init__(self, timeout: float = 3, nameservers: Optional[List[str]] = None):
        """Initialize DNS utilities.
        
        Args:
            timeout: DNS query timeout in seconds
            nameservers: Optional resolver addresses to use instead of the system ones
        """
        self.timeout = timeout
        self.logger = logging.getLogger('batchwhois.dns_utils')
        self.resolver = Resolver()
        self.resolver.timeout = timeout
        self.resolver.lifetime = timeout
        if nameservers:
            self.resolver.nameservers = nameservers

    def get_nameservers(self, domain: str) -> Optional[List[str]]:
        """Return the NS records of a domain.
        
        Args:
            domain: Domain name to query
            
        Returns:
            Sorted nameserver names, an empty list if the domain exists but
            has no NS records, or None if the domain does not exist
            
        Raises:
            NetworkError: If the query times out or no nameserver answers
        """
        try:
            answers = self.resolver.resolve(domain, 'NS')
            return sorted(answer.to_text().rstrip('.') for answer in answers)
        except NXDOMAIN:
            self.logger.debug(f"Domain {domain} does not exist")
            return None
        except NoAnswer:
            self.logger.debug(f"No NS records for {domain}")
            return []
        except Timeout:
            self.logger.debug(f"Timeout resolving {domain}")
            raise NetworkError(f"Timeout resolving {domain}")
        except NoNameservers:
            self.logger.debug(f"No nameservers available for {domain}")
            raise NetworkError(f"No nameservers available for {domain}")
        except dns.exception.DNSException as e:
            self.logger.debug(f"Error resolving {domain}: {e}")
            raise NetworkError(f"Error resolving {domain}") from e
