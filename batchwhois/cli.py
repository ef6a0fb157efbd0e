"""Command-line interface for batchwhois."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from batchwhois import __version__
from batchwhois.core.exceptions import (
    APIError, ConfigurationError, NetworkError, QueryError, ValidationError
)
from batchwhois.core.interfaces import (
    DEFAULT_THREAD_COUNT, BatchConfig, LookupBackend, PositionSpec, RunState
)
from batchwhois.lookup import BACKENDS
from batchwhois.utils.error_handler import ErrorHandler
from batchwhois.utils.patterns import PATTERN_CHOICES, PATTERNS


class CLI:
    """Command-line interface for batchwhois."""

    def __init__(self):
        """Initialize the CLI."""
        self.parser = self._create_parser()
        self.logger = logging.getLogger('batchwhois.cli')

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with all subcommands.

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog='batchwhois',
            description='batchwhois - generate candidate domains and check their availability',
            epilog='Example: batchwhois batch --positions d,d,d --suffix com --pattern AA'
        )
        parser.add_argument(
            '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )

        # Options shared by every subcommand
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            '-v', '--verbose',
            action='store_true',
            help='Enable verbose output'
        )
        common.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Suppress all non-error output'
        )

        # Options describing the candidate space
        generation = argparse.ArgumentParser(add_help=False)
        generation.add_argument(
            '--positions',
            required=True,
            help="Comma-separated positions: d (digit), l (letter) or =text (fixed text)"
        )
        generation.add_argument(
            '--suffix',
            required=True,
            help='Domain suffix, e.g. com'
        )
        generation.add_argument(
            '--pattern',
            default=None,
            help='Pattern filter for all-digit labels (see the patterns command)'
        )
        generation.add_argument(
            '--max-candidates',
            type=int,
            default=None,
            help='Refuse to generate more than this many candidates'
        )

        # Options for the lookup backend
        backend = argparse.ArgumentParser(add_help=False)
        backend.add_argument(
            '--backend',
            choices=sorted(BACKENDS),
            default='whois',
            help='Lookup backend (default: whois)'
        )
        backend.add_argument(
            '--whois-url',
            default=None,
            help='WHOIS API endpoint for the whois backend'
        )
        backend.add_argument(
            '--timeout',
            type=float,
            default=10,
            help='Per-query timeout in seconds (default: 10)'
        )

        subparsers = parser.add_subparsers(dest='command', metavar='command')
        subparsers.required = True

        subparsers.add_parser(
            'patterns',
            parents=[common],
            help='List the available pattern filters'
        )

        subparsers.add_parser(
            'preview',
            parents=[common, generation],
            help='Print the candidate domains without querying them'
        )

        check = subparsers.add_parser(
            'check',
            parents=[common, backend],
            help='Look up a single domain'
        )
        check.add_argument(
            'domain',
            help='Domain to look up'
        )

        batch = subparsers.add_parser(
            'batch',
            parents=[common, generation, backend],
            help='Generate candidates and look them all up'
        )
        batch.add_argument(
            '--threads',
            type=int,
            default=DEFAULT_THREAD_COUNT,
            help=f'Number of concurrent workers, 1-30 (default: {DEFAULT_THREAD_COUNT})'
        )
        batch.add_argument(
            '--rate-limit',
            type=int,
            default=None,
            help='Maximum number of queries per second across all workers'
        )
        batch.add_argument(
            '--filter',
            dest='keyword',
            default=None,
            help='Only report domains containing this text (case-insensitive)'
        )
        batch.add_argument(
            '--available-only',
            action='store_true',
            help='Leave registered and failed domains out of text output'
        )
        batch.add_argument(
            '--output',
            choices=['text', 'json', 'csv'],
            default='text',
            help='Output format (default: text)'
        )
        batch.add_argument(
            '--output-file',
            help='Write output to file instead of stdout'
        )

        return parser

    def parse_arguments(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments.

        Args:
            args: Command-line arguments (None for sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def validate_input(self, args: argparse.Namespace) -> None:
        """Validate options argparse cannot check on its own.

        Raises:
            ValidationError: If input is invalid
        """
        if args.verbose and args.quiet:
            raise ValidationError("Cannot specify both --verbose and --quiet")

        if getattr(args, 'rate_limit', None) is not None and args.rate_limit < 1:
            raise ValidationError("Rate limit must be at least 1")

        if getattr(args, 'timeout', None) is not None and args.timeout <= 0:
            raise ValidationError("Timeout must be positive")

    def build_config(self, args: argparse.Namespace) -> BatchConfig:
        """Build the batch configuration from parsed arguments.

        Raises:
            ValidationError: If a position token is invalid
            GenerationBoundsError: If the number of positions is out of range
        """
        positions = [PositionSpec.parse(token) for token in args.positions.split(',')]
        return BatchConfig(
            positions=positions,
            suffix=args.suffix.strip().lstrip('.'),
            thread_count=getattr(args, 'threads', DEFAULT_THREAD_COUNT),
            pattern=args.pattern,
            max_candidates=args.max_candidates,
        )

    def build_backend(self, args: argparse.Namespace) -> LookupBackend:
        """Create the lookup backend selected on the command line."""
        backend_class = BACKENDS[args.backend]
        if args.backend == 'whois' and args.whois_url:
            return backend_class(base_url=args.whois_url, timeout=args.timeout)
        return backend_class(timeout=args.timeout)

    def list_patterns(self) -> None:
        """Print the pattern filters and their descriptions."""
        for name, label in PATTERN_CHOICES:
            doc = (PATTERNS[name].__doc__ or '').strip()
            print(f"{name:<16}{label}" + (f" - {doc}" if doc and doc != label else ""))

    def preview(self, args: argparse.Namespace) -> None:
        """Print the candidate domains of a configuration."""
        from batchwhois.core.generator import generate_domains
        from batchwhois.utils.validators import validate_domains

        domains = generate_domains(self.build_config(args))
        validate_domains(domains)
        for domain in domains:
            print(domain)
        if not args.quiet:
            print(f"\n{len(domains)} candidate domains", file=sys.stderr)

    def check(self, args: argparse.Namespace) -> None:
        """Look up a single domain and print the result as JSON."""
        backend = self.build_backend(args)
        result = backend.lookup(args.domain.strip().lower())
        print(json.dumps(result.to_dict(), indent=2, default=str, ensure_ascii=False))

    def batch(self, args: argparse.Namespace) -> RunState:
        """Run a full batch with a progress bar; Ctrl-C stops it gracefully."""
        from batchwhois.core.batch_manager import BatchManager
        from batchwhois.utils.formatters import write_output
        from batchwhois.utils.progress import progress_bar

        manager = BatchManager(self.build_config(args), self.build_backend(args),
                               rate_limit=args.rate_limit)
        domains = manager.validate()

        with progress_bar(total=len(domains), desc="Querying domains",
                          disable=args.quiet) as progress:
            handle = manager.start()
            try:
                for event in handle.events():
                    progress.update(event)
            except KeyboardInterrupt:
                progress.set_description("Stopping")
                manager.stop()
                for event in handle.events():
                    progress.update(event)
            handle.wait()

        state = handle.state
        write_output(state, args.output, args.output_file, keyword=args.keyword,
                     show_unavailable=not args.available_only)

        if not args.quiet:
            self.display_summary(state)
        return state

    def display_summary(self, state: RunState) -> None:
        """Display a one-line summary of a run on stderr."""
        if state.stopped:
            status = "stopped"
        elif state.is_complete:
            status = "completed"
        else:
            status = "partially completed"
        print(f"\nBatch {status}: {state.completed}/{state.total} domains queried",
              file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = CLI()
    args = cli.parse_arguments(argv)

    error_handler = ErrorHandler(verbose=args.verbose, quiet=args.quiet)

    try:
        cli.validate_input(args)

        if args.command == 'patterns':
            cli.list_patterns()
        elif args.command == 'preview':
            cli.preview(args)
        elif args.command == 'check':
            cli.check(args)
        elif args.command == 'batch':
            cli.batch(args)
        return 0
    except ValidationError as e:
        error_handler.handle_error('input', str(e), e)
    except ConfigurationError as e:
        error_handler.handle_error('config', str(e), e)
    except NetworkError as e:
        error_handler.handle_error('network', str(e), e)
    except APIError as e:
        error_handler.handle_error('api', str(e), e)
    except QueryError as e:
        error_handler.handle_error('query', str(e), e)
    except Exception as e:
        error_handler.handle_error('unexpected', "An unexpected error occurred", e)
    return 1


if __name__ == '__main__':
    sys.exit(main())
