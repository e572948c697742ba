# pawdiary/api/activities/test_routes.py

def _weight_payload(**overrides):
    payload = {
        'petId': 1,
        'category': 'Growth',
        'subcategory': 'Weight',
        'templateId': 'growth.weight',
        'title': 'Weekly weigh-in',
        'activityDate': '2024-01-15T10:30:00Z',
        'blocks': {
            'time': '2024-01-15T10:30:00Z',
            'weight': {'value': 1500, 'unit': 'g', 'measurementType': 'weight'},
            'notes': '',
        },
    }
    payload.update(overrides)
    return payload


def test_create_and_get_activity(client):
    response = client.post('/api/activities/', json=_weight_payload())
    assert response.status_code == 201
    created = response.get_json()
    assert created['id'] == 1
    assert 'notes' not in created['activity_data']['blocks']

    response = client.get(f"/api/activities/{created['id']}")
    assert response.status_code == 200
    body = response.get_json()
    assert body['form']['templateId'] == 'growth.weight'
    assert body['form']['activityDate'] == '2024-01-15T10:30:00Z'
    assert body['form']['blocks']['weight']['value'] == 1500
    # 표시용 블록만 읽기 좋은 단위로 변환됨
    assert body['display']['weight'] == {'value': 1.5, 'unit': 'kg', 'measurementType': 'weight'}

def test_create_with_missing_title(client):
    response = client.post('/api/activities/', json=_weight_payload(title='  '))
    assert response.status_code == 400
    assert response.get_json() == {'error_code': 'MAPPING_ERROR', 'field': 'title', 'message': 'title is required'}

def test_create_with_invalid_date(client):
    response = client.post('/api/activities/', json=_weight_payload(activityDate='someday'))
    assert response.status_code == 400
    assert response.get_json()['field'] == 'activity_date'

def test_create_with_invalid_category(client):
    response = client.post('/api/activities/', json=_weight_payload(category='Astrology'))
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'VALIDATION_ERROR'

def test_update_activity(client):
    created = client.post('/api/activities/', json=_weight_payload()).get_json()

    response = client.put(f"/api/activities/{created['id']}", json=_weight_payload(title='Monthly weigh-in'))
    assert response.status_code == 200
    updated = response.get_json()
    assert updated['title'] == 'Monthly weigh-in'
    assert updated['created_at'] == created['created_at']

def test_update_missing_activity(client):
    response = client.put('/api/activities/77', json=_weight_payload())
    assert response.status_code == 404
    assert response.get_json()['error_code'] == 'ACTIVITY_NOT_FOUND'

def test_get_typed_activity(client):
    created = client.post('/api/activities/', json=_weight_payload()).get_json()

    response = client.get(f"/api/activities/{created['id']}/typed")
    assert response.status_code == 200
    assert response.get_json() == {
        'type': 'Weight',
        'data': {'value': 1500, 'unit': 'g', 'measurement_type': 'weight'},
    }

def test_delete_activity(client):
    created = client.post('/api/activities/', json=_weight_payload()).get_json()

    assert client.delete(f"/api/activities/{created['id']}").status_code == 204
    assert client.get(f"/api/activities/{created['id']}").status_code == 404
    assert client.delete(f"/api/activities/{created['id']}").status_code == 404

def test_list_pet_activities(client):
    client.post('/api/activities/', json=_weight_payload(activityDate='2024-01-01T08:00:00Z'))
    client.post('/api/activities/', json=_weight_payload(activityDate='2024-02-01T08:00:00Z'))
    client.post('/api/activities/', json=_weight_payload(petId=2))

    response = client.get('/api/pets/1/activities')
    assert response.status_code == 200
    dates = [record['activity_date'] for record in response.get_json()]
    assert dates == ['2024-02-01T08:00:00Z', '2024-01-01T08:00:00Z']

def test_unknown_route_is_not_a_server_error(client):
    assert client.get('/api/activities/not-a-number').status_code == 404
