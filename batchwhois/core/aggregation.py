"""Derived views over batch results."""

from typing import Dict, List, Optional, Sequence

from batchwhois.core.interfaces import QueryResult


def _matches(result: QueryResult, keyword: Optional[str]) -> bool:
    return not keyword or keyword.lower() in result.domain.lower()


class ResultView:
    """Splits results into available and unavailable domains.
    
    Unavailable covers both registered domains and failed lookups. Both
    views keep the order of the underlying result list and can be narrowed
    by a case-insensitive substring of the domain.
    """

    def __init__(self, results: Sequence[QueryResult]):
        self.results = list(results)

    def available(self, keyword: Optional[str] = None) -> List[QueryResult]:
        return [r for r in self.results if r.is_available and _matches(r, keyword)]

    def unavailable(self, keyword: Optional[str] = None) -> List[QueryResult]:
        return [r for r in self.results if not r.is_available and _matches(r, keyword)]

    def summary(self) -> Dict[str, int]:
        """Count results per bucket."""
        errors = sum(1 for r in self.results if r.error)
        registered = sum(1 for r in self.results if r.is_registered and not r.error)
        return {
            'total': len(self.results),
            'available': len(self.results) - errors - registered,
            'registered': registered,
            'errors': errors,
        }
