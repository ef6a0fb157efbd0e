"""Lookup backends answering whether a domain is registered."""

from batchwhois.lookup.dns_lookup import DNSLookup
from batchwhois.lookup.whois_lookup import WhoisLookup

BACKENDS = {
    'whois': WhoisLookup,
    'dns': DNSLookup,
}
