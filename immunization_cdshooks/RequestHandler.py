# -*- coding: utf-8 -*-

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

import logging

from flask import json, request

from immunization_cdshooks import Auth
from immunization_cdshooks import pyizfhir
from immunization_cdshooks.Card import Card, Source, INFO
from immunization_cdshooks.errors import ValidationError
from immunization_cdshooks.Outcome import Outcome

logger = logging.getLogger(__name__)

HOOK = 'patient-view'

SOURCE = Source('Your Immune Registry', '')
SUMMARY = 'This patient has received immunizations'
NO_EXPIRATION = 'Does not expire'
TABLE_HEADER = '| Vaccination | Expiration Date |\n| :---: | :---: |\n'


class RequestHandler:
    def __init__(self, fhir_timeout, jwt_key=None, jwt_algorithms=None, jwt_audience=None, jwt_issuer=None):
        self.fhir_timeout = fhir_timeout
        self.jwt_key = jwt_key
        self.jwt_algorithms = jwt_algorithms
        self.jwt_audience = jwt_audience
        self.jwt_issuer = jwt_issuer

    def handle(self):
        token = Auth.bearer_token(request.headers.get('Authorization'))
        claims = Auth.decode_claims(token, self.jwt_key, self.jwt_algorithms, self.jwt_audience, self.jwt_issuer)
        logger.debug('bearer claims=%s', claims)

        hookdata = request.get_json(silent=True)
        fhir_server, patient_id, access_token = self.validate(hookdata)

        outcome, rows = pyizfhir.fetch_immunizations(fhir_server, patient_id, access_token, self.fhir_timeout)
        if outcome is Outcome.NOT_FOUND:
            logger.info('No immunization record found for patient %s', patient_id)
        elif outcome is Outcome.FAILED:
            logger.warning('Immunization lookup failed for patient %s, returning no cards', patient_id)

        return json.jsonify({
            'cards': self.get_cards(rows)
        })

    def validate(self, hookdata):
        """Check the hook request and return (fhir_server, patient_id, access_token)."""
        if not isinstance(hookdata, dict):
            raise ValidationError('Request body must be a JSON object')

        if hookdata.get('hook') != HOOK:
            logger.warning("CDS Hook doesn't match what was expected: %s", hookdata.get('hook'))
            raise ValidationError("CDS Hook doesn't match what was expected")

        fhir_server = hookdata.get('fhirServer')
        context = hookdata.get('context')
        patient_id = context.get('patientId') if isinstance(context, dict) else None
        if not fhir_server or not isinstance(fhir_server, str):
            raise ValidationError('fhirServer is required')
        if not patient_id or not isinstance(patient_id, str):
            raise ValidationError('context.patientId is required')

        access_token = None
        fhir_authorization = hookdata.get('fhirAuthorization')
        if isinstance(fhir_authorization, dict):
            access_token = fhir_authorization.get('access_token')

        return fhir_server, patient_id, access_token

    def get_cards(self, rows):
        if not rows:
            return []

        iz_card = Card(SUMMARY, INFO, SOURCE, TABLE_HEADER)
        iz_card.detail += '\n'.join(
            '| %s | %s |' % (row.vaccine, row.expiration_date or NO_EXPIRATION) for row in rows)

        return [iz_card.get_card()]
