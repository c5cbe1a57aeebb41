"""Tests for bearer token extraction and JWT decoding."""

import pytest

from conftest import SECRET, make_token
from immunization_cdshooks import Auth
from immunization_cdshooks.errors import AuthenticationError, ValidationError


class TestBearerToken:
    def test_extracts_token(self):
        assert Auth.bearer_token('Bearer abc.def.ghi') == 'abc.def.ghi'

    def test_scheme_is_case_insensitive(self):
        assert Auth.bearer_token('bearer abc') == 'abc'

    def test_extra_whitespace(self):
        assert Auth.bearer_token('  Bearer   abc  ') == 'abc'

    @pytest.mark.parametrize('header', [None, ''])
    def test_missing_header(self, header):
        with pytest.raises(ValidationError) as e:
            Auth.bearer_token(header)
        assert e.value.status_code == 400

    @pytest.mark.parametrize('header', ['Bearer', 'abc', 'Basic dXNlcjpwYXNz', 'Bearer a b'])
    def test_malformed_header(self, header):
        with pytest.raises(ValidationError):
            Auth.bearer_token(header)


class TestDecodeClaims:
    def test_unverified_decode(self):
        token = make_token({'iss': 'https://ehr.example.org', 'sub': 'client'})
        assert Auth.decode_claims(token) == {'iss': 'https://ehr.example.org', 'sub': 'client'}

    def test_unverified_decode_ignores_signature(self):
        token = make_token({'sub': 'client'}, key='another-secret-for-hmac-signing-0123456789')
        assert Auth.decode_claims(token) == {'sub': 'client'}

    def test_garbage_token_returns_none(self):
        assert Auth.decode_claims('not-a-jwt') is None

    def test_verified_decode(self):
        token = make_token({'sub': 'client'})
        assert Auth.decode_claims(token, SECRET, ['HS256']) == {'sub': 'client'}

    def test_bad_signature_raises(self):
        token = make_token({'sub': 'client'}, key='another-secret-for-hmac-signing-0123456789')
        with pytest.raises(AuthenticationError) as e:
            Auth.decode_claims(token, SECRET, ['HS256'])
        assert e.value.status_code == 401

    def test_audience_checked_when_configured(self):
        token = make_token({'aud': 'https://elsewhere.example.org'})
        with pytest.raises(AuthenticationError):
            Auth.decode_claims(token, SECRET, ['HS256'], audience='https://cds.example.org')

    def test_audience_ignored_when_not_configured(self):
        token = make_token({'aud': 'https://cds.example.org'})
        assert Auth.decode_claims(token, SECRET, ['HS256']) == {'aud': 'https://cds.example.org'}

    def test_issuer_checked_when_configured(self):
        token = make_token({'iss': 'https://other-ehr.example.org'})
        with pytest.raises(AuthenticationError):
            Auth.decode_claims(token, SECRET, ['HS256'], issuer='https://ehr.example.org')
