"""
Integration tests for the CLI module.
"""
import json
import threading
import pytest
from unittest.mock import patch

from batchwhois.cli import CLI, main
from batchwhois.core.dispatcher import RunHandle
from batchwhois.core.exceptions import NetworkError, QueryError, ValidationError
from batchwhois.core.interfaces import PositionSpec, QueryResult
from batchwhois.lookup import DNSLookup, WhoisLookup


_handle_events = RunHandle.events


class TestCLIIntegration:
    """Integration tests for the CLI module."""

    def test_parse_batch_arguments(self):
        """Batch defaults are applied."""
        args = CLI().parse_arguments(['batch', '--positions', 'd,d', '--suffix', 'com'])

        assert args.command == 'batch'
        assert args.threads == 10
        assert args.backend == 'whois'
        assert args.output == 'text'
        assert args.pattern is None
        assert args.keyword is None
        assert args.verbose is False

    def test_missing_command(self):
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            CLI().parse_arguments([])

    def test_build_config(self):
        """Positions, suffix and threads end up in the config."""
        cli = CLI()
        args = cli.parse_arguments(['batch', '--positions', 'd,l,=go', '--suffix', '.io',
                                    '--threads', '99', '--pattern', 'AA'])
        config = cli.build_config(args)

        assert config.positions == (PositionSpec.digit(), PositionSpec.letter(), PositionSpec.fixed("go"))
        assert config.suffix == "io"
        assert config.thread_count == 30
        assert config.pattern == "AA"

    @patch('batchwhois.lookup.dns_lookup.DNSUtils')
    def test_build_backend(self, mock_dns_utils):
        """The backend option selects the lookup class."""
        cli = CLI()
        args = cli.parse_arguments(['check', 'example.com', '--whois-url', 'https://w.example/api'])
        backend = cli.build_backend(args)
        assert isinstance(backend, WhoisLookup)
        assert backend.base_url == 'https://w.example/api'

        args = cli.parse_arguments(['check', 'example.com', '--backend', 'dns', '--timeout', '2'])
        assert isinstance(cli.build_backend(args), DNSLookup)

    def test_validate_input_conflicting_verbosity(self):
        cli = CLI()
        args = cli.parse_arguments(['patterns', '-v', '-q'])
        with pytest.raises(ValidationError):
            cli.validate_input(args)

    def test_patterns_command(self, capsys):
        assert main(['patterns', '-q']) == 0
        output = capsys.readouterr().out
        assert "useConsecutive" in output
        assert "ABCDEE" in output

    def test_preview_command(self, capsys):
        """Preview prints the filtered candidates."""
        assert main(['preview', '--positions', 'd,d', '--suffix', 'com', '--pattern', 'AA', '-q']) == 0
        lines = capsys.readouterr().out.split()
        assert lines == [f"{i}{i}.com" for i in range(10)]

    def test_preview_invalid_suffix_exits(self, capsys):
        """A bad suffix is a configuration error."""
        with pytest.raises(SystemExit) as excinfo:
            main(['preview', '--positions', 'd', '--suffix=-com'])
        assert excinfo.value.code == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_too_many_positions_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(['preview', '--positions', 'd,d,d,d,d,d,d', '--suffix', 'com'])
        assert "between 1 and 6" in capsys.readouterr().err

    @patch.object(WhoisLookup, 'lookup')
    def test_check_command(self, mock_lookup, capsys):
        """check prints the wire-shape result."""
        mock_lookup.return_value = QueryResult("example.com", is_registered=True, data={"Registrar": "x"})

        assert main(['check', 'Example.com', '-q']) == 0

        mock_lookup.assert_called_once_with("example.com")
        output = json.loads(capsys.readouterr().out)
        assert output == {'domain': "example.com", 'isRegistered': True, 'whoisData': {"Registrar": "x"}}

    @patch.object(WhoisLookup, 'lookup')
    def test_check_network_error(self, mock_lookup, capsys):
        """Network failures are reported with a non-zero status."""
        mock_lookup.side_effect = NetworkError("Timeout connecting to api")
        assert main(['check', 'example.com', '-q']) == 1
        assert "Network Error: Timeout connecting to api" in capsys.readouterr().err

    @patch('batchwhois.lookup.dns_lookup.DNSUtils')
    @patch.object(DNSLookup, 'lookup')
    def test_batch_command_json(self, mock_lookup, mock_dns_utils, tmp_path):
        """A full batch run writes every result."""
        mock_lookup.side_effect = lambda domain: QueryResult(
            domain, is_registered=domain.startswith("1"), data={})
        output_file = tmp_path / "out.json"

        status = main(['batch', '--positions', 'd', '--suffix', 'com', '--backend', 'dns',
                       '--threads', '3', '--output', 'json', '--output-file', str(output_file), '-q'])

        assert status == 0
        data = json.loads(output_file.read_text(encoding='utf-8'))
        assert data['total'] == 10
        assert data['completed'] == 10
        assert data['stopped'] is False
        assert [r['domain'] for r in data['unavailable']] == ["1.com"]
        assert len(data['available']) == 9

    @patch('batchwhois.lookup.dns_lookup.DNSUtils')
    @patch.object(DNSLookup, 'lookup')
    def test_batch_keyword_filter(self, mock_lookup, mock_dns_utils, capsys):
        """--filter narrows the reported domains."""
        mock_lookup.side_effect = lambda domain: QueryResult(domain, data={})

        main(['batch', '--positions', 'd,d', '--suffix', 'com', '--backend', 'dns',
              '--pattern', 'AA', '--filter', '77', '--output', 'csv', '-q'])

        rows = capsys.readouterr().out.split()
        assert rows == ["Domain,Status,Error", "77.com,available,"]

    @patch.object(WhoisLookup, 'lookup')
    def test_check_query_error(self, mock_lookup, capsys):
        """An unclassifiable answer is reported as a query error."""
        mock_lookup.side_effect = QueryError("WHOIS response for example.com carries no record")
        assert main(['check', 'example.com', '-q']) == 1
        assert "Query Error: WHOIS response for example.com carries no record" in capsys.readouterr().err

    @patch('batchwhois.lookup.dns_lookup.DNSUtils')
    @patch.object(DNSLookup, 'lookup')
    def test_batch_interrupt_reports_partial_results(self, mock_lookup, mock_dns_utils, tmp_path):
        """Ctrl-C stops the run and the partial results are still written."""
        release = threading.Event()
        calls = []

        def lookup(domain):
            if domain != "0.com":
                release.wait(5)
            return QueryResult(domain, data={'nameservers': [], 'status': 'NXDOMAIN'})

        def first_then_interrupt(handle):
            events = _handle_events(handle)
            yield next(events)
            raise KeyboardInterrupt

        def events(handle):
            calls.append(handle)
            if len(calls) == 1:
                return first_then_interrupt(handle)
            release.set()
            return _handle_events(handle)

        mock_lookup.side_effect = lookup
        output_file = tmp_path / "out.json"

        with patch.object(RunHandle, 'events', autospec=True, side_effect=events):
            status = main(['batch', '--positions', 'd', '--suffix', 'com', '--backend', 'dns',
                           '--threads', '1', '--output', 'json', '--output-file', str(output_file), '-q'])

        assert status == 0
        assert len(calls) == 2
        data = json.loads(output_file.read_text(encoding='utf-8'))
        assert data['stopped'] is True
        assert data['total'] == 10
        assert data['completed'] == 1
        assert data['completed'] < data['total']
        assert [r['domain'] for r in data['available']] == ["0.com"]
