from unittest.mock import MagicMock

import jwt
import pytest

from immunization_cdshooks.immunization_cdshooks_server import app

FHIR_SERVER = 'https://fhir.example.org/r4'
SECRET = 'test-secret-for-hmac-signing-0123456789'


@pytest.fixture
def client():
    """Provide a Flask test client."""
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


def make_token(claims=None, key=SECRET, algorithm='HS256'):
    return jwt.encode(claims or {'iss': 'https://ehr.example.org', 'jti': 'abc'}, key, algorithm=algorithm)


def auth_header(token=None):
    return {'Authorization': 'Bearer ' + (token or make_token())}


def hook_request(hook='patient-view', patient_id='1234', fhir_server=FHIR_SERVER, **extra):
    body = {
        'hook': hook,
        'hookInstance': 'd1577c69-dfbe-44ad-ba6d-3e05e953b2ea',
        'fhirServer': fhir_server,
        'context': {'patientId': patient_id},
    }
    body.update(extra)
    return body


def immunization(text, expiration_date=None):
    resource = {'resourceType': 'Immunization', 'vaccineCode': {'text': text}}
    if expiration_date:
        resource['expirationDate'] = expiration_date
    return {'resource': resource}


def bundle(*entries):
    return {'resourceType': 'Bundle', 'type': 'searchset', 'total': len(entries), 'entry': list(entries)}


def fhir_response(body, status_code=200):
    """A stand-in for requests.Response returning ``body`` from json()."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body
    resp.raise_for_status.return_value = None
    return resp
