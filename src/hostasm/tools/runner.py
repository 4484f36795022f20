import sys
import importlib
import logging as lg
import tomllib
import traceback
from pathlib import Path

import click
from click.core import ParameterSource

from hostasm.common.errors import ExecutionError, ScanError
from hostasm.runtime.definition import Definition
import hostasm.sasm.scanner as scanner


EXIT_OK = 0
EXIT_KEYBOARD = 3
EXIT_SCAN_ERROR = 4
EXIT_EXEC_ERROR = 5
EXIT_READ_ERROR = 6
EXIT_HOST_ERROR = 100
EXIT_GENERAL_ERROR = 101


class HostLoadError(Exception):
    pass


class ProgramReadError(Exception):
    pass


class RunSettings:
    host: str | None
    verbose: bool
    dump: bool

    def __init__(self):
        self.host = None
        self.verbose = False
        self.dump = False

    def update(
        self,
        host: str | None = None,
        verbose: bool | None = None,
        dump: bool | None = None
    ):
        if host is not None:
            self.host = host

        if verbose is not None:
            self.verbose = verbose

        if dump is not None:
            self.dump = dump

        return self


def load_settings(config_path: Path) -> RunSettings:
    try:
        config = tomllib.loads(config_path.read_text())
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise HostLoadError(f'Cannot read config {config_path}: {e}') from e

    run_config = config.get('run', {})

    if not isinstance(run_config, dict):
        raise HostLoadError(f'[run] in {config_path} must be a table')

    if not isinstance(run_config.get('host', ''), str):
        raise HostLoadError(f'host in {config_path} must be a string')

    try:
        return RunSettings().update(**run_config)
    except TypeError as e:
        raise HostLoadError(f'Invalid [run] table in {config_path}: {e}') from e


def load_host(host: str) -> Definition:
    ''' Load a definition from MODULE:ATTR, calling ATTR if it is a factory '''

    cwd = str(Path.cwd())

    # Host modules resolve relative to the working directory
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    modulename, sep, attr = host.partition(':')

    if not sep or not modulename or not attr:
        raise HostLoadError(f'Host must be given as MODULE:ATTR, got {host}')

    try:
        module = importlib.import_module(modulename)
    except Exception as e:
        raise HostLoadError(f'Cannot import host module {modulename}: {e}') from e

    target = getattr(module, attr, None)

    if target is None:
        raise HostLoadError(f'Module {modulename} has no attribute {attr}')

    if not isinstance(target, Definition) and callable(target):
        lg.debug(f'Calling host factory {host}')

        try:
            target = target()
        except Exception as e:
            raise HostLoadError(f'Host factory {host} failed: {e}') from e

    if not isinstance(target, Definition):
        raise HostLoadError(f'Host {host} did not produce a Definition')

    return target


def dump_registers(definition: Definition):
    for name, value in sorted(definition.registers.items()):
        click.echo(f'{name}={value}')


def read_program(program: Path):
    try:
        return scanner.collect_file(program)
    except (OSError, UnicodeDecodeError) as e:
        raise ProgramReadError(f'Cannot read program {program}: {e}') from e


def prepare(settings: RunSettings, program: Path):
    if settings.host is None:
        raise HostLoadError('No host given (use --host or the [run] table)')

    definition = load_host(settings.host)
    tokens = read_program(program)
    return (definition, tokens)


def from_command_line(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE


def execute(settings: RunSettings, program: Path) -> int:
    lg.basicConfig(level=lg.DEBUG if settings.verbose else lg.INFO)
    lg.info('HOSTASM')

    try:
        (definition, tokens) = prepare(settings, program)

    except HostLoadError as e:
        lg.error(str(e))
        return EXIT_HOST_ERROR

    except ProgramReadError as e:
        lg.error(str(e))
        return EXIT_READ_ERROR

    except ScanError as e:
        lg.error(f'Scan failed: {e}')
        return EXIT_SCAN_ERROR

    exit_code = EXIT_OK

    try:
        definition.run(tokens)

    except ExecutionError as e:
        # Registers keep whatever the completed instructions wrote
        lg.error(f'Execution failed: {e}')
        exit_code = EXIT_EXEC_ERROR

    if settings.verbose:
        definition.debug_dump()

    if settings.dump:
        dump_registers(definition)

    return exit_code


@click.command()
@click.option('-v', '--verbose/--quiet', default=False, help='Sets logging level to debug')
@click.option('--host', help='Definition factory as MODULE:ATTR')
@click.option('-c', '--config', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='TOML settings file')
@click.option('--dump/--no-dump', default=False, help='Print final register values')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def run(ctx: click.Context, verbose: bool, host: str | None, config: Path | None, dump: bool, program: Path):
    try:
        settings = load_settings(config) if config else RunSettings()
    except HostLoadError as e:
        lg.error(str(e))
        sys.exit(EXIT_HOST_ERROR)

    # Options given on the command line win over the config file
    settings.update(
        host=host,
        verbose=verbose if from_command_line(ctx, 'verbose') else None,
        dump=dump if from_command_line(ctx, 'dump') else None
    )

    try:
        sys.exit(execute(settings, program))

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.error(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_GENERAL_ERROR)


if __name__ == '__main__':
    run()
