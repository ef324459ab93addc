from flask import Blueprint, current_app, jsonify, redirect

main = Blueprint('main', __name__)


def _registry():
    return current_app.extensions['throwrelay'].registry


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the throw relay!'})


@main.route('/create-room')
def create_room():
    room_id = _registry().create_room()
    return redirect(f"/game.html?room={room_id}")


@main.route('/rooms')
def list_rooms():
    # Listing also sweeps expired rooms
    return jsonify({'rooms': _registry().list_active()})
