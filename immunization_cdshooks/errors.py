# -*- coding: utf-8 -*-

"""Errors reported back to the calling EHR as ``{"error": ...}`` bodies."""

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"


class HookError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(HookError):
    status_code = 400


class AuthenticationError(HookError):
    status_code = 401
