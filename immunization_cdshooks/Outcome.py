# -*- coding: utf-8 -*-

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

from enum import Enum


class Outcome(Enum):
    """Result of looking up a patient's immunization history."""
    FOUND = 'found'
    NOT_FOUND = 'not-found'
    FAILED = 'failed'
