# type: ignore
import pytest
from click.testing import CliRunner

from hostasm.runtime.definition import Definition
import hostasm.tools.runner as runner

import unit_utils


def invoke(*args):
    return CliRunner().invoke(runner.run, [str(arg) for arg in args])


def data_file(filename: str):
    return unit_utils.find_file(f'testdata/sasm/{filename}')


def test_run_with_dump():
    result = invoke('--host', 'sample_host:build', '--dump', data_file('addition.hasm'))
    lines = result.output.splitlines()

    assert result.exit_code == runner.EXIT_OK
    assert '2 1' in lines
    assert ['R1=2', 'R2=1', 'R3=0', 'R4=0'] == [x for x in lines if '=' in x]


def test_run_from_config():
    result = invoke('-c', data_file('run.toml'), data_file('addition.hasm'))

    assert result.exit_code == runner.EXIT_OK
    assert 'R1=2' in result.output.splitlines()


def test_execution_error_keeps_partial_state():
    result = invoke('--host', 'sample_host:build', '--dump', data_file('unknownreg.hasm'))
    lines = result.output.splitlines()

    assert result.exit_code == runner.EXIT_EXEC_ERROR
    assert 'R1=1' in lines
    assert 'R2=0' in lines


def test_scan_error():
    result = invoke('--host', 'sample_host:build', data_file('label.hasm'))
    assert result.exit_code == runner.EXIT_SCAN_ERROR


@pytest.mark.parametrize('args', [
    [],
    ['--host', 'sample_host'],
    ['--host', 'no_such_host_module:build'],
    ['--host', 'sample_host:missing'],
    ['--host', 'sample_host:mov'],
    ['--host', 'sample_host:__name__'],
    ['-c', data_file('badrun.toml')],
])
def test_host_errors(args):
    result = invoke(*args, data_file('addition.hasm'))
    assert result.exit_code == runner.EXIT_HOST_ERROR


def test_load_host():
    assert isinstance(runner.load_host('sample_host:build'), Definition)


def test_load_settings():
    settings = runner.load_settings(data_file('run.toml'))

    assert settings.host == 'sample_host:build'
    assert settings.dump
    assert not settings.verbose


def test_settings_update():
    settings = runner.RunSettings().update(verbose=True).update(dump=None)

    assert settings.verbose
    assert not settings.dump
    assert settings.host is None


def test_no_dump_overrides_config():
    result = invoke('-c', data_file('run.toml'), '--no-dump', data_file('addition.hasm'))
    lines = result.output.splitlines()

    assert result.exit_code == runner.EXIT_OK
    assert '2 1' in lines
    assert not [x for x in lines if '=' in x]


def test_quiet_overrides_config(monkeypatch):
    seen = []
    monkeypatch.setattr(runner, 'execute', lambda settings, program: seen.append(settings) or 0)

    result = invoke('-c', data_file('quiet.toml'), '--quiet', data_file('addition.hasm'))

    assert result.exit_code == runner.EXIT_OK
    assert not seen[0].verbose


def test_config_verbose_kept_without_flag(monkeypatch):
    seen = []
    monkeypatch.setattr(runner, 'execute', lambda settings, program: seen.append(settings) or 0)

    invoke('-c', data_file('quiet.toml'), data_file('addition.hasm'))

    assert seen[0].verbose


def test_exit_codes_distinct_from_usage_errors():
    codes = [
        runner.EXIT_OK,
        runner.EXIT_KEYBOARD,
        runner.EXIT_SCAN_ERROR,
        runner.EXIT_EXEC_ERROR,
        runner.EXIT_READ_ERROR,
        runner.EXIT_HOST_ERROR,
        runner.EXIT_GENERAL_ERROR
    ]

    assert len(set(codes)) == len(codes)
    assert 1 not in codes
    assert 2 not in codes


def test_missing_program_is_usage_error(tmp_path):
    result = invoke('--host', 'sample_host:build', tmp_path / 'missing.hasm')

    assert result.exit_code == 2
    assert result.exit_code != runner.EXIT_EXEC_ERROR


def test_directory_program_is_usage_error(tmp_path):
    result = invoke('--host', 'sample_host:build', tmp_path)

    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_undecodable_program(tmp_path):
    program = tmp_path / 'binary.hasm'
    program.write_bytes(b'MOV [R1] \xff\xfe\n')

    result = invoke('--host', 'sample_host:build', program)

    assert result.exit_code == runner.EXIT_READ_ERROR
    assert isinstance(result.exception, SystemExit)


def test_host_module_failing_on_import():
    result = invoke('--host', 'broken_host:build', data_file('addition.hasm'))

    assert result.exit_code == runner.EXIT_HOST_ERROR
    assert isinstance(result.exception, SystemExit)


def test_non_string_host_in_config():
    with pytest.raises(runner.HostLoadError):
        runner.load_settings(data_file('inthost.toml'))

    result = invoke('-c', data_file('inthost.toml'), data_file('addition.hasm'))
    assert result.exit_code == runner.EXIT_HOST_ERROR


def test_unexpected_error(monkeypatch):
    def explode(settings, program):
        raise RuntimeError('unexpected')

    monkeypatch.setattr(runner, 'prepare', explode)
    result = invoke('--host', 'sample_host:build', data_file('addition.hasm'))

    assert result.exit_code == runner.EXIT_GENERAL_ERROR
    assert isinstance(result.exception, SystemExit)
