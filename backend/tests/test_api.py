from arena.models import Participant, Position


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_list_rooms(client, registry):
    room = registry.get_or_create('alpha')
    room.players['p1'] = Participant('p1', [Position(5, 5), Position(4, 5), Position(3, 5)], 'RIGHT')
    registry.get_or_create('beta')

    res = client.get('/api/rooms')

    assert res.status_code == 200
    rooms = {r['roomId']: r for r in res.get_json()}
    assert rooms['alpha'] == {'roomId': 'alpha', 'players': ['p1'], 'full': False}
    assert rooms['beta']['players'] == []


def test_get_room_snapshot(client, registry):
    room = registry.get_or_create('alpha')
    room.players['p1'] = Participant('p1', [Position(5, 5), Position(4, 5), Position(3, 5)], 'RIGHT')

    res = client.get('/api/rooms/alpha')

    assert res.status_code == 200
    data = res.get_json()
    assert data['roomId'] == 'alpha'
    assert data['players']['p1']['snake'] == [[5, 5], [4, 5], [3, 5]]
    assert data['food'] == list(room.food)


def test_get_missing_room(client):
    res = client.get('/api/rooms/nope')
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Room not found'}
