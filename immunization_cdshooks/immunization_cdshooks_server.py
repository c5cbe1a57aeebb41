#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""immunization_cdshooks: A Python 3 + Flask implementation of a CDS Hooks
'patient-view' service.

On 'patient-view' the service searches the EHR's FHIR server for the
patient's Immunization resources and returns a single card listing each
vaccination with its expiration date.

"""

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

import logging

from flask import Flask, json, request
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed

from immunization_cdshooks.errors import HookError
from immunization_cdshooks.RequestHandler import RequestHandler

logger = logging.getLogger(__name__)

# PORT should match the reverse proxy configuration in front of this service
PORT = 3000
# FHIR_TIMEOUT is the (connect, read) pair of seconds handed to requests. The read
# limit applies to each socket read, not to the whole response, so a server that
# trickles bytes can take longer than the sum
FHIR_TIMEOUT = (3.05, 10)
# JWT_VERIFICATION_KEY is the EHR's public key (or shared secret); when None the
# bearer token is decoded for logging only and never verified
JWT_VERIFICATION_KEY = None
JWT_ALGORITHMS = ['RS384', 'ES384']
JWT_AUDIENCE = None
JWT_ISSUER = None

ALLOW_METHODS = 'GET, POST, OPTIONS'
ALLOW_HEADERS = 'Content-Type, Authorization, Origin, Accept, Content-Location, Location, X-Requested-With'
ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

SERVICES = {
    'services': [
        {
            'hook': 'patient-view',
            'title': 'Immunization history',
            'description': 'Lists the immunizations on record for the patient being viewed',
            'id': 'patientService',
        }
    ]
}

app = Flask(__name__)


# Every EHR expects these headers, on errors too. after_request hooks run in
# reverse order, so this one runs after flask-cors has set the origin.
@app.after_request
def add_ehr_headers(response):
    response.headers.setdefault('Access-Control-Allow-Origin', '*')
    response.headers['Access-Control-Allow-Method'] = ALLOW_METHODS
    response.headers['Access-Control-Allow-Credentials'] = 'true'
    response.headers['Access-Control-Allow-Headers'] = ALLOW_HEADERS
    return response


CORS(app, origins='*', methods=['GET', 'POST', 'OPTIONS'], send_wildcard=True, always_send=True)


@app.errorhandler(HookError)
def hook_error(e):
    return json.jsonify(e.to_dict()), e.status_code


@app.route('/test1/cds-services', methods=['GET', 'OPTIONS'])
def discovery():
    logger.info('Handling the discovery request')
    return json.jsonify(SERVICES)


@app.route('/test1/cds-services/patientService', methods=['OPTIONS'])
def service_options():
    logger.info('OPTIONS request to patientService')
    return '', 200


@app.route('/test1/cds-services/patientService', methods=['POST'], provide_automatic_options=False)
def patient_service():
    logger.info('POST request to patientService')
    h = RequestHandler(FHIR_TIMEOUT, JWT_VERIFICATION_KEY, JWT_ALGORITHMS, JWT_AUDIENCE, JWT_ISSUER)
    return h.handle()


# Only useful while integrating with an EHR, a production deployment should answer 404 instead
@app.route('/', defaults={'path': ''}, methods=ALL_METHODS)
@app.route('/<path:path>', methods=ALL_METHODS)
def not_implemented(path):
    return not_implemented_response()


# methods outside ALL_METHODS never reach the catch-all route
@app.errorhandler(MethodNotAllowed)
def method_not_allowed(e):
    return not_implemented_response()


def not_implemented_response():
    logger.warning('Unimplemented service: %s %s query=%s', request.method, request.url, request.args.to_dict())
    return json.jsonify({
        'error': 'This service has not been implemented: %s using HTTP Method %s' % (request.full_path.rstrip('?'),
                                                                                    request.method)
    }), 501


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )
    logger.info('Listening on %d', PORT)
    app.run(host='0.0.0.0', port=PORT)


if __name__ == '__main__':
    main()
