# -*- coding: utf-8 -*-

"""FHIR immunization lookup for the patient-view service.

Queries the EHR's FHIR server for a patient's Immunization resources and
turns the search Bundle into rows sorted the way a reader expects to see
vaccine names listed.

"""

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

import logging
from collections import namedtuple

import requests
from pyuca import Collator

from immunization_cdshooks.Outcome import Outcome

logger = logging.getLogger(__name__)

FHIR_HEADERS = {
    'Accept': 'application/json+fhir',
}

ImmunizationRow = namedtuple('ImmunizationRow', ['vaccine', 'expiration_date'])

_collator = Collator()


def fetch_immunizations(fhir_server, patient_id, access_token=None, timeout=None):
    """Search ``{fhir_server}/Immunization?patient={patient_id}``.

    Returns (outcome, rows). Rows are empty unless the outcome is FOUND. Any
    network, HTTP, JSON or bundle shape problem is logged and reported as
    Outcome.FAILED rather than raised.

    """
    url = fhir_server.rstrip('/') + '/Immunization'
    headers = dict(FHIR_HEADERS)
    if access_token:
        headers['Authorization'] = 'Bearer ' + access_token

    try:
        r = requests.get(url, params={'patient': patient_id}, headers=headers, timeout=timeout)
        r.raise_for_status()
        bundle = r.json()
        outcome, rows = bundle2rows(bundle)
    except requests.RequestException as e:
        logger.warning('Immunization search on %s failed: %s', url, e)
        return Outcome.FAILED, []
    except ValueError as e:
        logger.warning('Unusable Immunization bundle from %s: %s', url, e)
        return Outcome.FAILED, []

    logger.debug('Immunization search on %s for patient %s: %s (%d rows)',
                 url, patient_id, outcome.value, len(rows))
    return outcome, rows


def bundle2rows(bundle):
    """Take a FHIR search Bundle of Immunization resources and return
    (outcome, rows). Raise ValueError when the bundle does not have the
    expected shape.

    """
    if not isinstance(bundle, dict):
        raise ValueError('bundle is not a JSON object')
    if bundle.get('total') == 0:
        return Outcome.NOT_FOUND, []

    entries = bundle.get('entry')
    if not isinstance(entries, list):
        raise ValueError('bundle has no entry list')

    rows = []
    for entry in entries:
        try:
            resource = entry['resource']
            vaccine = resource['vaccineCode']['text']
        except (KeyError, TypeError):
            raise ValueError('entry without resource.vaccineCode.text: %r' % (entry,))
        if not isinstance(vaccine, str):
            raise ValueError('vaccineCode.text is not a string: %r' % (vaccine,))
        rows.append(ImmunizationRow(vaccine, resource.get('expirationDate')))

    return Outcome.FOUND, sort_rows(rows)


def sort_rows(rows):
    # sorted() is stable, equal vaccine names keep bundle order
    return sorted(rows, key=lambda row: _collator.sort_key(row.vaccine))
