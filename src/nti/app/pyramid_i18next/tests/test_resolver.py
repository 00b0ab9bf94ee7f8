#!/usr/bin/env python
# -*- coding: utf-8 -*-

# disable: accessing protected members, too many methods
# pylint: disable=W0212,R0904

import unittest

from hamcrest import assert_that
from hamcrest import contains_exactly
from hamcrest import is_
from hamcrest import none

from zope import interface

from zope.interface.registry import Components

from ..interfaces import ILanguageDetector

from ..options import DEFAULT_ORDER
from ..options import DetectionOptions

from ..resolver import accepted_languages
from ..resolver import collect_candidates
from ..resolver import detect_language
from ..resolver import effective_order

from ..translator import LanguageUtils

from . import make_request


@interface.implementer(ILanguageDetector)
class RecordingDetector(object):

    def __init__(self, result, calls):
        self.result = result
        self.calls = calls

    def detect(self, request, options):
        self.calls.append(self)
        return self.result


class TestResolver(unittest.TestCase):

    def setUp(self):
        self.registry = Components()
        self.utils = LanguageUtils(whitelist=['en', 'fr', 'ru', 'en-US'])

    def _request(self, path='/', **kwargs):
        return make_request(path, self.registry, **kwargs)

    def test_effective_order(self):
        assert_that(effective_order(None), is_(DEFAULT_ORDER))
        assert_that(effective_order([]), is_(DEFAULT_ORDER))
        assert_that(effective_order(['path']), is_(('path',)))

    def test_unwhitelisted_querystring_falls_through_to_header(self):
        options = DetectionOptions(order=['querystring', 'header'], fallback='en')
        request = self._request('/?lng=xx', headers={'Accept-Language': 'en;q=1'})
        assert_that(detect_language(request, options, self.utils), is_('en'))

    def test_precedence(self):
        options = DetectionOptions(order=['cookie', 'querystring', 'header'])
        request = self._request('/?lng=fr',
                                headers={'Accept-Language': 'en',
                                         'Cookie': 'i18next=ru'})
        assert_that(detect_language(request, options, self.utils), is_('ru'))

    def test_normalizes(self):
        options = DetectionOptions()
        request = self._request('/?lng=EN-us')
        assert_that(detect_language(request, options, self.utils), is_('en-US'))

    def test_fallback(self):
        request = self._request('/?lng=xx')
        assert_that(detect_language(request, DetectionOptions(fallback='fr'), self.utils),
                    is_('fr'))

    def test_nothing_no_fallback(self):
        request = self._request('/?lng=xx')
        assert_that(detect_language(request, DetectionOptions(), self.utils),
                    is_(none()))

    def test_candidates_flattened_in_order(self):
        options = DetectionOptions(order=['querystring', 'header', 'cookie'])
        request = self._request('/?lng=xx',
                                headers={'Accept-Language': 'de;q=0.1,fr,es;q=0.5',
                                         'Cookie': 'i18next=ru'})
        assert_that(collect_candidates(request, options),
                    contains_exactly('xx', 'fr', 'es', 'de', 'ru'))
        assert_that(list(accepted_languages(request, options, self.utils)),
                    contains_exactly('fr', 'ru'))

    def test_unknown_detectors_skipped(self):
        options = DetectionOptions(order=['nope', 'querystring'])
        request = self._request('/?lng=ru')
        assert_that(detect_language(request, options, self.utils), is_('ru'))

    def test_registered_detectors_in_order(self):
        calls = []
        first = RecordingDetector(['xx', 'fr'], calls)
        second = RecordingDetector(None, calls)
        third = RecordingDetector('ru', calls)
        for name, detector in (('first', first), ('second', second), ('third', third)):
            self.registry.registerUtility(detector, ILanguageDetector, name=name)

        options = DetectionOptions(order=['third', 'second', 'first'])
        assert_that(detect_language(self._request(), options, self.utils), is_('ru'))
        # Every detector runs before any filtering
        assert_that(calls, contains_exactly(third, second, first))

    def test_registered_detector_overrides_builtin(self):
        calls = []
        self.registry.registerUtility(RecordingDetector('fr', calls),
                                      ILanguageDetector, name='querystring')
        request = self._request('/?lng=ru')
        assert_that(detect_language(request, DetectionOptions(), self.utils), is_('fr'))

    def test_explicit_order_argument(self):
        options = DetectionOptions(order=['querystring', 'path'],
                                   lookup_from_path_index=0)
        request = self._request('/fr/page?lng=ru')
        assert_that(detect_language(request, options, self.utils), is_('ru'))
        assert_that(detect_language(request, options, self.utils, order=('path',)),
                    is_('fr'))
        assert_that(options.order, is_(('querystring', 'path')))

    def test_idempotent(self):
        options = DetectionOptions(order=['querystring', 'header'])
        request = self._request('/?lng=xx', headers={'Accept-Language': 'fr,en;q=0.5'})
        first = detect_language(request, options, self.utils)
        assert_that(detect_language(request, options, self.utils), is_(first))
        assert_that(first, is_('fr'))
