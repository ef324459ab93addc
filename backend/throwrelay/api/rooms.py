from flask import Blueprint, current_app, jsonify, request

from throwrelay.errors import RoomNotFound
from throwrelay.models import normalize_room_id

rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['throwrelay'].registry


def _base_url() -> str:
    return (current_app.config.get('PUBLIC_BASE_URL') or request.host_url).rstrip('/')


def _links(room_id: str) -> dict:
    base = _base_url()
    return {
        'game_url': f"{base}/game.html?room={room_id}",
        'controller_url': f"{base}/controller.html?room={room_id}",
    }


@rooms.route('', methods=['POST'])
@rooms.route('/', methods=['POST'])
def create_room():
    """
    Creates a room and returns the links the display and controller open.
    """
    registry = _registry()
    room_id = registry.create_room()
    room = registry.get(room_id)
    payload = room.to_dict()
    payload.update(_links(room_id))
    return jsonify(payload), 201


@rooms.route('', methods=['GET'])
@rooms.route('/', methods=['GET'])
def list_rooms():
    return jsonify({'rooms': _registry().list_active()}), 200


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room(room_id):
    """
    Returns occupancy details for one room.
    """
    try:
        room = _registry().get(normalize_room_id(room_id))
    except RoomNotFound:
        return jsonify({'error': 'Room does not exist'}), 404
    payload = room.to_dict()
    payload['controller_url'] = _links(room.id)['controller_url']
    return jsonify(payload), 200
