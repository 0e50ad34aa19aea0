"""
Tournament Controller

Handles all tournament-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.tournament_service import get_tournament_service
from ..utils.errors import (
    ConflictError, ExternalToolError, NotFoundError, ProverError, ToolTimeoutError, ValidationError
)
from ..utils.prover_logger import prover_logger

tournament_bp = Blueprint('tournament', __name__)


def _status_for(error: Exception) -> int:
    """HTTP status for an error raised by the tournament service."""
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ToolTimeoutError):
        return 504
    if isinstance(error, ExternalToolError):
        return 502
    if isinstance(error, ProverError):
        # ValidationError and EncodingError
        return 400
    return 500


def _error_response(action, error, tournament_id=None):
    prover_logger.log_error(request, error, action, tournament_id)
    if isinstance(error, ProverError):
        error_response = {'success': False, **error.to_dict()}
    else:
        error_response = {'success': False, 'kind': 'internal', 'error': str(error)}
    prover_logger.log_server_response(request, action, False, error_response, tournament_id)
    return jsonify(error_response), _status_for(error)


def _service_unavailable():
    return jsonify({
        'success': False,
        'kind': 'internal',
        'error': 'Tournament service unavailable'
    }), 500


def _parse_tournament_id(raw_id):
    try:
        tournament_id = int(raw_id)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid tournament id '{raw_id}'")
    if tournament_id < 0:
        raise ValidationError(f"Invalid tournament id '{raw_id}'")
    return tournament_id


def _request_object(required=False):
    data = request.get_json(silent=True)
    if data is None:
        if required:
            raise ValidationError('Request body is required')
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    if required and not data:
        raise ValidationError('Request body is required')
    return data


@tournament_bp.route('/tournament/create', methods=['POST'])
def create_tournament():
    """Pick a word and compute its commitment for the on-chain create transaction."""
    tournament_service = get_tournament_service()
    if not tournament_service:
        return _service_unavailable()

    try:
        data = _request_object()
        word_index = data.get('wordIndex')

        prover_logger.log_user_action(request, 'create', random_word=word_index is None)

        created = tournament_service.create_tournament(word_index)
        response_data = {
            'success': True,
            'commitment': created.commitment,
            'salt': created.salt,
            'wordIndex': created.word_index,
            'solutionPacked': created.packed_solution
        }

        prover_logger.log_server_response(request, 'create', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('create', e)


@tournament_bp.route('/tournament/<raw_id>/register', methods=['POST'])
def register_tournament(raw_id):
    """Persist the tournament secret after on-chain creation succeeded."""
    tournament_service = get_tournament_service()
    if not tournament_service:
        return _service_unavailable()

    tournament_id = None
    try:
        tournament_id = _parse_tournament_id(raw_id)

        data = _request_object(required=True)

        word_index = data.get('wordIndex')
        prover_logger.log_user_action(request, 'register', tournament_id)

        tournament_service.register_tournament(
            tournament_id, data.get('salt'), word_index, data.get('commitment')
        )
        response_data = {
            'success': True,
            'ok': True,
            'tournamentId': tournament_id
        }

        prover_logger.log_server_response(request, 'register', True, response_data, tournament_id)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('register', e, tournament_id)


@tournament_bp.route('/tournament/<raw_id>/prove', methods=['POST'])
def prove_guess(raw_id):
    """Compute the clue for a guess and generate its proof calldata."""
    tournament_service = get_tournament_service()
    if not tournament_service:
        return _service_unavailable()

    tournament_id = None
    try:
        tournament_id = _parse_tournament_id(raw_id)

        data = _request_object()
        guess = data.get('guess')
        if not guess:
            raise ValidationError('Guess is required')

        prover_logger.log_user_action(request, 'prove', tournament_id, guess=guess)

        proof = tournament_service.prove_guess(tournament_id, guess)
        response_data = {
            'success': True,
            'calldata': proof.calldata,
            'clue': proof.clue,
            'cluePacked': proof.packed_clue,
            'guess': proof.guess
        }

        prover_logger.log_server_response(
            request, 'prove', True, response_data, tournament_id,
            clue_packed=proof.packed_clue
        )
        return jsonify(response_data)

    except Exception as e:
        return _error_response('prove', e, tournament_id)


@tournament_bp.route('/tournament/<raw_id>/reveal', methods=['GET'])
def reveal_tournament(raw_id):
    """Return the solution of a finished tournament for the end transaction."""
    tournament_service = get_tournament_service()
    if not tournament_service:
        return _service_unavailable()

    tournament_id = None
    try:
        tournament_id = _parse_tournament_id(raw_id)

        prover_logger.log_user_action(request, 'reveal', tournament_id)

        revealed = tournament_service.reveal_tournament(tournament_id)
        response_data = {
            'success': True,
            'solution': revealed.solution,
            'solutionIndex': revealed.word_index,
            'salt': revealed.salt,
            'solutionPacked': revealed.packed_solution
        }

        prover_logger.log_server_response(request, 'reveal', True, response_data, tournament_id)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('reveal', e, tournament_id)


@tournament_bp.route('/health', methods=['GET'])
def health():
    """Liveness check."""
    return jsonify({'status': 'ok'})
