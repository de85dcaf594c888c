from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


def _registry():
    return current_app.extensions['room_registry']


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the snake arena server!'})


@main.route('/api/rooms')
def list_rooms():
    summaries = []
    for room in _registry().rooms():
        with room.lock:
            if room.closed:
                continue
            summaries.append(room.summary())
    return jsonify(summaries)


@main.route('/api/rooms/<string:room_id>')
def get_room(room_id):
    room = _registry().get(room_id)
    if room is None:
        return jsonify({'error': 'Room not found'}), 404
    with room.lock:
        if room.closed:
            return jsonify({'error': 'Room not found'}), 404
        return jsonify(room.to_dict())
