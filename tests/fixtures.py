# type: ignore
import pytest

import sample_host


@pytest.fixture
def with_host():
    yield sample_host.build()


@pytest.fixture
def with_log(with_host):
    ''' Host whose LOG instruction records resolved operand values '''
    log = []
    with_host.declare_instruction('LOG', lambda args: log.append(args.values()))
    yield (with_host, log)
