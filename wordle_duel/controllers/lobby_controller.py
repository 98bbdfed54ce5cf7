"""
Lobby Controller

Handles the HTTP endpoints: health check, lobby summary, and room lookup.
"""

from flask import Blueprint, request, jsonify, current_app
from ..utils.game_logger import game_logger

lobby_bp = Blueprint('lobby', __name__)


@lobby_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')

        registry = current_app.room_registry
        response_data = {
            'status': 'healthy',
            'active_rooms': len(registry.rooms),
            'connected_players': len(registry.player_rooms),
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500


@lobby_bp.route('/lobby/state', methods=['GET'])
def get_lobby_state():
    """Get current lobby state."""
    game_logger.log_user_action(request, 'get_lobby_state')

    result = current_app.room_registry.summary()
    game_logger.log_server_response(request, 'get_lobby_state', True, result)
    return jsonify(result)


@lobby_bp.route('/rooms/<code>', methods=['GET'])
def get_room(code):
    """Look up a room by code before joining it."""
    game_logger.log_user_action(request, 'get_room', code.upper())

    room = current_app.room_registry.get_room(code)
    if room is None:
        error_response = {
            'success': False,
            'error': 'Room not found'
        }
        game_logger.log_server_response(request, 'get_room', False, error_response, code.upper())
        return jsonify(error_response), 404

    response_data = {
        'success': True,
        'room': room.summary()
    }
    game_logger.log_server_response(request, 'get_room', True, response_data, room.code)
    return jsonify(response_data)
