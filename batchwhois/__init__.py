"""
batchwhois - Batch domain availability scanner

Generates candidate domain names from a per-position alphabet, prunes them
with numeric pattern filters and checks each one against a WHOIS or DNS
backend using a pool of concurrent workers.
"""

__version__ = "1.0.0"
__author__ = "batchwhois Development Team"
