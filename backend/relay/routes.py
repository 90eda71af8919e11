from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    rooms = current_app.extensions['relay']['rooms']
    return jsonify({
        'message': 'Welcome to the chess relay server!',
        'rooms': len(rooms),
        'max_rooms': rooms.max_rooms,
    })

@main.route('/health')
def health():
    return jsonify({'status': 'ok'})
