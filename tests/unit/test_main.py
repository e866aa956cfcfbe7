"""
Tests for hostmetrics.main entry points.

Tests cover:
- One system collection cycle writing exactly one dated file
- VMware documents written to a directory or printed to stdout
- Exit codes for success, collection failure, invalid configuration,
  missing tools and interruption
"""

import io
import json
import socket
from unittest.mock import patch

import pytest

from hostmetrics.config import EXIT_CODE, VMwareConfig
from hostmetrics.main import (
    run_system_collector,
    run_vmware_collector,
    system_entry,
    system_main,
    vmware_main,
)
from hostmetrics.utils import is_valid_file_timestamp
from tests.fixtures import (
    MockCommandExecutor,
    SAMPLE_SAR_CPU,
    SAMPLE_SAR_CPU_PARSED,
    SAMPLE_SAR_NO_AVERAGE,
    vmware_stat_responses,
)

HOSTNAME = 'pe-primary.example.com'


def written_files(root):
    return sorted(root.rglob('*.json'))


class TestRunSystemCollector:
    """Tests for run_system_collector."""

    def test_success_writes_one_file(self, make_config, capturing_logger, tmp_path):
        config = make_config()
        executor = MockCommandExecutor({r'^sar': (SAMPLE_SAR_CPU, '', 0)})

        exit_code = run_system_collector(config, capturing_logger, executor=executor, hostname=HOSTNAME)

        assert exit_code == EXIT_CODE.SUCCESS
        files = written_files(tmp_path / 'metrics')
        assert len(files) == 1
        assert files[0].parent == tmp_path / 'metrics' / 'system_cpu' / HOSTNAME
        assert is_valid_file_timestamp(files[0].stem)

        document = json.loads(files[0].read_text())
        assert document['servers']['pe-primary-example-com']['system_cpu'] == SAMPLE_SAR_CPU_PARSED

    def test_failure_still_writes_error_document(self, make_config, mock_logger, tmp_path):
        config = make_config()
        executor = MockCommandExecutor({r'^sar': (SAMPLE_SAR_NO_AVERAGE, '', 0)})

        exit_code = run_system_collector(config, mock_logger, executor=executor, hostname=HOSTNAME)

        assert exit_code == EXIT_CODE.FAILURE
        files = written_files(tmp_path / 'metrics')
        assert len(files) == 1
        payload = json.loads(files[0].read_text())['servers']['pe-primary-example-com']['system_cpu']
        assert list(payload) == ['error']

    def test_unwritable_metrics_dir(self, make_config, capturing_logger, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        config = make_config(metrics_dir=str(blocker))
        executor = MockCommandExecutor({r'^sar': (SAMPLE_SAR_CPU, '', 0)})

        exit_code = run_system_collector(config, capturing_logger, executor=executor, hostname=HOSTNAME)

        assert exit_code == EXIT_CODE.FAILURE
        assert capturing_logger.has_message('error', 'Failed to write metrics file')


class TestRunVMwareCollector:
    """Tests for run_vmware_collector."""

    def test_prints_document_without_output_dir(self, mock_logger):
        stream = io.StringIO()
        executor = MockCommandExecutor(vmware_stat_responses())

        exit_code = run_vmware_collector(VMwareConfig(), mock_logger, executor=executor,
                                         hostname=HOSTNAME, stream=stream)

        assert exit_code == EXIT_CODE.SUCCESS
        document = json.loads(stream.getvalue())
        assert set(document['servers']['pe-primary-example-com']['vmware']) == {
            'session', 'host', 'resources', 'vscsi', 'vnet',
        }

    def test_writes_to_output_dir(self, vmware_config, mock_logger, tmp_path):
        executor = MockCommandExecutor(vmware_stat_responses())

        exit_code = run_vmware_collector(vmware_config, mock_logger, executor=executor, hostname=HOSTNAME)

        assert exit_code == EXIT_CODE.SUCCESS
        files = written_files(tmp_path / 'metrics')
        assert len(files) == 1
        assert files[0].parent == tmp_path / 'metrics' / 'vmware' / HOSTNAME

    def test_error_document_returns_failure(self, mock_logger):
        responses = vmware_stat_responses()
        responses[r'stat raw$'] = ('', 'Unable to connect', 1)
        stream = io.StringIO()

        exit_code = run_vmware_collector(VMwareConfig(), mock_logger, executor=MockCommandExecutor(responses),
                                         hostname=HOSTNAME, stream=stream)

        assert exit_code == EXIT_CODE.FAILURE
        assert 'error' in json.loads(stream.getvalue())['servers']['pe-primary-example-com']['vmware']


class TestSystemMain:
    """Tests for system_main."""

    def test_end_to_end(self, tmp_path):
        metrics_dir = tmp_path / 'metrics'
        executor = MockCommandExecutor({r'^sar': (SAMPLE_SAR_CPU, '', 0)})

        with patch('hostmetrics.dependency_check.shutil.which', return_value='/usr/bin/sar'), \
                patch('hostmetrics.collectors.system.CommandExecutor', return_value=executor):
            exit_code = system_main(['--polling_interval', '1', '--file_interval', '3',
                                     '--metrics_dir', str(metrics_dir)])

        assert exit_code == EXIT_CODE.SUCCESS
        executor.assert_command_executed(r'^sar 1 3$')
        files = written_files(metrics_dir)
        assert len(files) == 1
        assert files[0].parent.name == socket.gethostname()

    def test_invalid_intervals(self, tmp_path, capsys):
        """A polling interval not below the file interval is a configuration error."""
        exit_code = system_main(['--polling_interval', '300', '--file_interval', '300',
                                 '--metrics_dir', str(tmp_path)])

        assert exit_code == EXIT_CODE.INVALID_ARGUMENTS
        assert 'E105' in capsys.readouterr().err
        assert written_files(tmp_path) == []

    def test_invalid_config_file(self, tmp_path):
        exit_code = system_main(['-c', str(tmp_path / 'missing.yaml')])
        assert exit_code == EXIT_CODE.INVALID_ARGUMENTS

    def test_invalid_metric_type_in_config_file(self, tmp_path):
        config_file = tmp_path / 'hostmetrics.yaml'
        config_file.write_text("metric_type: system_disk\n")
        assert system_main(['-c', str(config_file)]) == EXIT_CODE.INVALID_ARGUMENTS

    def test_missing_sysstat(self, tmp_path, capsys):
        with patch('hostmetrics.dependency_check.shutil.which', return_value=None):
            exit_code = system_main(['--metrics_dir', str(tmp_path)])

        assert exit_code == EXIT_CODE.FAILURE
        assert 'sysstat' in capsys.readouterr().err
        assert written_files(tmp_path) == []

    def test_interrupted(self, tmp_path):
        with patch('hostmetrics.dependency_check.shutil.which', return_value='/usr/bin/sar'), \
                patch('hostmetrics.main.run_system_collector', side_effect=KeyboardInterrupt):
            exit_code = system_main(['--metrics_dir', str(tmp_path)])
        assert exit_code == EXIT_CODE.INTERRUPTED

    def test_entry_exits_with_code(self):
        with patch('hostmetrics.main.system_main', return_value=EXIT_CODE.FAILURE):
            with pytest.raises(SystemExit) as exc_info:
                system_entry()
        assert exc_info.value.code == 1


class TestVMwareMain:
    """Tests for vmware_main."""

    def test_prints_to_stdout(self, capsys):
        executor = MockCommandExecutor(vmware_stat_responses())
        with patch('hostmetrics.collectors.vmware.CommandExecutor', return_value=executor):
            exit_code = vmware_main([])

        assert exit_code == EXIT_CODE.SUCCESS
        document = json.loads(capsys.readouterr().out)
        assert 'timestamp' in document
        assert len(document['servers']) == 1

    def test_timeout_passed_to_toolbox_calls(self):
        executor = MockCommandExecutor(vmware_stat_responses())
        with patch('hostmetrics.collectors.vmware.CommandExecutor', return_value=executor):
            vmware_main(['--timeout', '3'])
        assert 3 in executor.timeouts

    def test_missing_toolbox(self, capsys):
        executor = MockCommandExecutor({r'^sh -c': ('', '', 1)})
        with patch('hostmetrics.collectors.vmware.CommandExecutor', return_value=executor):
            exit_code = vmware_main([])

        assert exit_code == EXIT_CODE.FAILURE
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'vmware-toolbox-cmd' in captured.err

    def test_invalid_timeout(self):
        assert vmware_main(['--timeout', '0']) == EXIT_CODE.INVALID_ARGUMENTS

    def test_unexpected_error(self):
        with patch('hostmetrics.main.run_vmware_collector', side_effect=RuntimeError('boom')):
            assert vmware_main([]) == EXIT_CODE.FAILURE

    def test_interrupted(self):
        with patch('hostmetrics.main.run_vmware_collector', side_effect=KeyboardInterrupt):
            assert vmware_main([]) == EXIT_CODE.INTERRUPTED
