# -*- coding: utf-8 -*-

"""Bearer token handling for CDS Hooks invocations.

The EHR signs a JWT and sends it as ``Authorization: Bearer <token>``. By
default the token is only decoded so its claims can be logged; when a
verification key is configured the signature, audience and issuer are
checked as well.

"""

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

import logging

import jwt

from immunization_cdshooks.errors import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


def bearer_token(authorization):
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise ValidationError('Missing Authorization header')
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        raise ValidationError('Malformed Authorization header, expected "Bearer <token>"')
    return parts[1]


def decode_claims(token, key=None, algorithms=None, audience=None, issuer=None):
    """Decode the JWT claims.

    Without a key the token is decoded unverified and a token that cannot be
    decoded at all yields None. With a key, any verification failure raises
    AuthenticationError.

    """
    if key is None:
        try:
            return jwt.decode(token, options={'verify_signature': False})
        except jwt.InvalidTokenError as e:
            logger.warning('Could not decode bearer token: %s', e)
            return None

    try:
        return jwt.decode(token, key,
                          algorithms=algorithms,
                          audience=audience,
                          issuer=issuer,
                          options={'verify_aud': audience is not None,
                                   'verify_iss': issuer is not None})
    except jwt.InvalidTokenError as e:
        logger.warning('Bearer token failed verification: %s', e)
        raise AuthenticationError('Bearer token failed verification: %s' % (e,))
