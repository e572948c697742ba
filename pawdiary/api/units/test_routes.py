# pawdiary/api/units/test_routes.py

def test_list_units(client):
    response = client.get('/api/units/')
    assert response.status_code == 200
    ids = [unit['id'] for unit in response.get_json()]
    assert 'kg' in ids and 'ml' in ids

def test_list_units_by_category(client):
    response = client.get('/api/units/?category=temperature')
    assert response.status_code == 200
    units = response.get_json()
    assert [u['id'] for u in units] == ['celsius', 'fahrenheit']
    assert units[0]['isBaseUnit'] is True
    assert units[1]['baseUnit'] == 'celsius'

def test_list_units_invalid_category(client):
    response = client.get('/api/units/?category=speed')
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'VALIDATION_ERROR'

def test_convert(client):
    response = client.post('/api/units/convert', json={'value': 2, 'fromUnit': 'kg', 'toUnit': 'g'})
    assert response.status_code == 200
    assert response.get_json() == {'value': 2000, 'unit': 'g'}

def test_convert_optimal(client):
    response = client.post('/api/units/convert',
                           json={'value': 2, 'fromUnit': 'kg', 'toUnit': 'g', 'optimal': True})
    assert response.get_json() == {'value': 2, 'unit': 'kg'}

def test_convert_impossible(client):
    response = client.post('/api/units/convert', json={'value': 5, 'fromUnit': 'kg', 'toUnit': 'ml'})
    assert response.status_code == 422
    assert response.get_json()['error_code'] == 'CONVERSION_IMPOSSIBLE'

def test_convert_missing_fields(client):
    response = client.post('/api/units/convert', json={'value': 5})
    assert response.status_code == 400
    details = response.get_json()['details']
    assert 'fromUnit' in details and 'toUnit' in details

def test_preferences_flow(client):
    response = client.get('/api/units/preferences')
    assert response.status_code == 200
    assert response.get_json()['resolved']['weight'] == 'g'

    response = client.put('/api/units/preferences', json={'category': 'weight', 'unitId': 'lb', 'petId': 4})
    assert response.status_code == 200
    body = response.get_json()
    assert body['resolved']['weight'] == 'lb'
    assert body['preferences']['petSpecificUnits'] == {'4': {'weight': 'lb'}}
    assert body['degraded'] is False

    response = client.get('/api/units/preferences?pet_id=4')
    assert response.get_json()['resolved']['weight'] == 'lb'

    response = client.delete('/api/units/preferences?pet_id=4')
    assert response.status_code == 200
    assert response.get_json()['resolved']['weight'] == 'g'

def test_update_preference_with_wrong_category(client):
    response = client.put('/api/units/preferences', json={'category': 'weight', 'unitId': 'ml'})
    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'INVALID_UNIT'
