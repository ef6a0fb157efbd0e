"""Output formatters for batchwhois."""

import csv
import io
import json
import sys
from typing import List, Optional

from batchwhois.core.aggregation import ResultView
from batchwhois.core.interfaces import OutputFormatter, QueryResult, RunState


def result_status(result: QueryResult) -> str:
    if result.error:
        return 'error'
    return 'registered' if result.is_registered else 'available'


def _sorted(results: List[QueryResult]) -> List[QueryResult]:
    return sorted(results, key=lambda r: r.domain)


class TextFormatter(OutputFormatter):
    """Format results as plain text."""

    def __init__(self, show_unavailable: bool = True):
        """Initialize the text formatter.
        
        Args:
            show_unavailable: Whether to list registered and failed domains
        """
        self.show_unavailable = show_unavailable

    def format(self, state: RunState, keyword: Optional[str] = None) -> str:
        view = ResultView(state.results)
        output = io.StringIO()

        output.write("Batch Domain Query Results\n")
        output.write("=" * 40 + "\n\n")

        available = _sorted(view.available(keyword))
        output.write(f"Available ({len(available)})\n")
        output.write("-" * 40 + "\n")
        for result in available:
            output.write(f"{result.domain}\n")
        if not available:
            output.write("No available domains found.\n")
        output.write("\n")

        if self.show_unavailable:
            unavailable = _sorted(view.unavailable(keyword))
            output.write(f"Registered or failed ({len(unavailable)})\n")
            output.write("-" * 40 + "\n")
            for result in unavailable:
                if result.error:
                    output.write(f"{result.domain}  [error: {result.error}]\n")
                else:
                    output.write(f"{result.domain}\n")
            output.write("\n")

        summary = view.summary()
        output.write("Summary\n")
        output.write("-" * 40 + "\n")
        output.write(f"Queried: {state.completed}/{state.total} ({state.progress:.1f}%)\n")
        output.write(f"Available: {summary['available']}\n")
        output.write(f"Registered: {summary['registered']}\n")
        output.write(f"Errors: {summary['errors']}\n")
        if state.stopped:
            output.write("Run was stopped before completion.\n")

        return output.getvalue()


class JSONFormatter(OutputFormatter):
    """Format results as JSON."""

    def format(self, state: RunState, keyword: Optional[str] = None) -> str:
        view = ResultView(state.results)
        output = {
            'total': state.total,
            'completed': state.completed,
            'stopped': state.stopped,
            'summary': view.summary(),
            'available': [r.to_dict() for r in _sorted(view.available(keyword))],
            'unavailable': [r.to_dict() for r in _sorted(view.unavailable(keyword))],
        }
        # WHOIS payloads may hold values json cannot encode natively
        return json.dumps(output, indent=2, default=str, ensure_ascii=False)


class CSVFormatter(OutputFormatter):
    """Format results as CSV, one row per queried domain."""

    def format(self, state: RunState, keyword: Optional[str] = None) -> str:
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(['Domain', 'Status', 'Error'])

        view = ResultView(state.results)
        rows = _sorted(view.available(keyword) + view.unavailable(keyword))
        for result in rows:
            writer.writerow([result.domain, result_status(result), result.error or ''])

        return output.getvalue()


class FormatterFactory:
    """Factory for creating output formatters."""

    @staticmethod
    def create_formatter(format_type: str, show_unavailable: bool = True) -> OutputFormatter:
        """Create an output formatter based on the format type.
        
        Args:
            format_type: Type of formatter (text, json, csv)
            show_unavailable: Whether text output lists unavailable domains
            
        Returns:
            OutputFormatter instance
            
        Raises:
            ValueError: If format type is invalid
        """
        if format_type == 'text':
            return TextFormatter(show_unavailable=show_unavailable)
        elif format_type == 'json':
            return JSONFormatter()
        elif format_type == 'csv':
            return CSVFormatter()
        else:
            raise ValueError(f"Invalid format type: {format_type}")


def write_output(state: RunState, format_type: str, output_file: Optional[str] = None,
                 keyword: Optional[str] = None, show_unavailable: bool = True) -> None:
    """Write formatted output to file or stdout.
    
    Args:
        state: Final run state
        format_type: Output format (text, json, csv)
        output_file: Optional output file path
        keyword: Optional case-insensitive domain filter
        show_unavailable: Whether text output lists unavailable domains
    """
    formatter = FormatterFactory.create_formatter(format_type, show_unavailable=show_unavailable)
    formatted_output = formatter.format(state, keyword)

    if output_file:
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            f.write(formatted_output)
    else:
        sys.stdout.write(formatted_output)
