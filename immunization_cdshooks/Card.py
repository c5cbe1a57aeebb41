# -*- coding: utf-8 -*-

"""CDS Hooks card and source objects returned to the EHR."""

__author__ = "Immunization CDS Hooks contributors"
__copyright__ = "Copyright 2026, Immunization CDS Hooks contributors"

INFO = 'info'
WARNING = 'warning'
CRITICAL = 'critical'

INDICATORS = (INFO, WARNING, CRITICAL)


class Source:
    def __init__(self, label, url=''):
        self.label = label
        self.url = url

    def get_source(self):
        return {
            'label': self.label,
            'url': self.url
        }


class Card:
    """A single CDS Hooks card. ``detail`` is GitHub flavored markdown and may be
    built up incrementally before calling get_card().

    """

    def __init__(self, summary, indicator, source, detail=''):
        if indicator not in INDICATORS:
            raise ValueError('Unknown card indicator: %s' % (indicator,))
        self.summary = summary
        self.indicator = indicator
        self.source = source
        self.detail = detail

    def get_card(self):
        return {
            'summary': self.summary,
            'detail': self.detail,
            'source': self.source.get_source(),
            'indicator': self.indicator
        }
