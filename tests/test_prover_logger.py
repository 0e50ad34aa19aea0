import json
import logging
from types import SimpleNamespace

import pytest

from tweetle_prover.utils.errors import ProofGenerationError
from tweetle_prover.utils.prover_logger import ProverLogger


@pytest.fixture
def prover_log(tmp_path):
    log = ProverLogger(str(tmp_path / 'logs'))
    records = []
    handler = logging.Handler()
    handler.emit = records.append
    log.logger.addHandler(handler)
    yield log, records
    log.logger.removeHandler(handler)


@pytest.fixture
def fake_request():
    return SimpleNamespace(remote_addr='10.0.0.1', endpoint='tournament.reveal_tournament',
                           method='GET', url='http://localhost/tournament/1/reveal')


def entry(record):
    return json.loads(record.getMessage())


def test_response_secrets_are_masked(prover_log, fake_request):
    log, records = prover_log

    log.log_server_response(fake_request, 'reveal', True, {'solution': 'crane', 'salt': '123', 'solutionIndex': 0}, 1)

    details = entry(records[-1])['details']
    assert details['response_data']['solution'] == '***'
    assert details['response_data']['salt'] == '***'
    assert details['response_data']['solutionIndex'] == '***'
    assert 'crane' not in records[-1].getMessage()


def test_create_response_hides_packed_solution_and_index(prover_log, fake_request):
    log, records = prover_log

    log.log_server_response(fake_request, 'create', True, {
        'commitment': '0xabc', 'salt': '123', 'wordIndex': 0, 'solutionPacked': '0x6372616e65'
    })

    response_data = entry(records[-1])['details']['response_data']
    assert response_data == {'commitment': '0xabc', 'salt': '***', 'wordIndex': '***', 'solutionPacked': '***'}


def test_calldata_is_summarized(prover_log, fake_request):
    log, records = prover_log

    log.log_server_response(fake_request, 'prove', True, {'calldata': ['0x1'] * 50}, 1)

    assert entry(records[-1])['details']['response_data']['calldata'] == {'length': 50}


def test_failed_response_logged_as_error(prover_log, fake_request):
    log, records = prover_log

    log.log_server_response(fake_request, 'prove', False, {'error': 'nope'}, 1)

    assert records[-1].levelno == logging.ERROR
    assert entry(records[-1])['event_type'] == 'SERVER_RESPONSE_ERROR'


def test_error_includes_stage(prover_log, fake_request):
    log, records = prover_log

    log.log_error(fake_request, ProofGenerationError('calldata', 'bad output'), 'prove', 1)

    details = entry(records[-1])['details']
    assert details['stage'] == 'calldata'
    assert details['error_type'] == 'ProofGenerationError'


def test_log_file_created(tmp_path):
    ProverLogger(str(tmp_path / 'logs'))
    assert list((tmp_path / 'logs').glob('prover_log_*.log'))
