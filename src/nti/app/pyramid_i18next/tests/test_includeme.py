#!/usr/bin/env python
# -*- coding: utf-8 -*-

# disable: accessing protected members, too many methods
# pylint: disable=W0212,R0904

import unittest

import simplejson

from hamcrest import assert_that
from hamcrest import contains_exactly
from hamcrest import has_entry
from hamcrest import has_key
from hamcrest import is_
from hamcrest import is_not as does_not

from pyramid import testing

from pyramid.request import Request
from pyramid.response import Response

from zope import interface

from zope.i18n.interfaces import IUserPreferredLanguages

from ..interfaces import IDetectionOptions
from ..interfaces import ILanguageDetector

from . import DelayedBackendConnector
from . import make_translator


def page_view(request):
    response = Response(text=request.t('hello', {'name': 'Ann'}))
    response.headers['X-Locale-Name'] = request.locale_name
    return response


@interface.implementer(ILanguageDetector)
class HostDetector(object):

    def detect(self, request, options):
        return request.host.split('.')[0]


class TestIncludeme(unittest.TestCase):

    settings = {
        'i18next.order': 'querystring cookie path header',
        'i18next.lookup_cookie': 'i18next',
        'i18next.lookup_path': 'lang',
        'i18next.resources_path': '/locales/resources.json',
        'i18next.missing_path': '/locales/add',
    }

    def setUp(self):
        self.config = testing.setUp(settings=dict(self.settings))
        self.config.include('nti.app.pyramid_i18next')
        self.translator = make_translator(resources={
            'en': {'translation': {'hello': 'Hello ${name}'}},
            'fr': {'translation': {'hello': 'Bonjour ${name}'}},
            'ru': {'translation': {'hello': 'Privet ${name}'}},
        })
        self.connector = DelayedBackendConnector(self.translator)
        self.translator.backend_connector = self.connector
        self.config.set_translator(self.translator)
        self.config.add_route('page', '/{lang}/page')
        self.config.add_view(page_view, route_name='page')
        self.config.add_route('plain', '/page')
        self.config.add_view(page_view, route_name='plain')

    def tearDown(self):
        testing.tearDown()

    def _get(self, path, **kwargs):
        app = self.config.make_wsgi_app()
        return Request.blank(path, **kwargs).get_response(app)

    def test_options_registered(self):
        options = self.config.registry.getUtility(IDetectionOptions)
        assert_that(options.order, is_(('querystring', 'cookie', 'path', 'header')))

    def test_querystring_wins(self):
        response = self._get('/ru/page?lng=fr', headers={'Accept-Language': 'en'})
        assert_that(response.text, is_('Bonjour Ann'))
        assert_that(response.headers, has_entry('Content-Language', 'fr'))
        assert_that(response.headers, has_entry('X-Locale-Name', 'fr'))
        assert_that(response.headers['Set-Cookie'].startswith('i18next=fr;'), is_(True))

    def test_route_parameter_after_routing(self):
        response = self._get('/ru/page', headers={'Accept-Language': 'xx'})
        assert_that(response.text, is_('Privet Ann'))
        assert_that(response.headers, has_entry('Content-Language', 'ru'))
        assert_that(response.headers, has_entry('X-Locale-Name', 'ru'))

    def test_header(self):
        response = self._get('/page', headers={'Accept-Language': 'xx,ru;q=0.2,fr;q=0.5'})
        assert_that(response.text, is_('Bonjour Ann'))

    def test_unresolved(self):
        response = self._get('/page', headers={'Accept-Language': 'xx'})
        assert_that(response.text, is_('Hello Ann'))
        assert_that(response.headers, does_not(has_key('Content-Language')))
        assert_that(response.headers, does_not(has_key('Set-Cookie')))

    def test_custom_detector(self):
        self.config.add_language_detector('path', HostDetector())
        response = self._get('/page', headers={'Host': 'ru.example.com',
                                               'Accept-Language': 'fr'})
        assert_that(response.text, is_('Privet Ann'))

    def test_preferred_languages_adapter(self):
        request = Request.blank('/page?lng=ru', headers={'Accept-Language': 'fr'})
        request.registry = self.config.registry
        langs = self.config.registry.getAdapter(request, IUserPreferredLanguages)
        assert_that(langs.getPreferredLanguages(), contains_exactly('ru', 'fr'))

    def test_resources_endpoint(self):
        response = self._get('/locales/resources.json?lng=en%20fr&ns=common')
        assert_that(response.status_int, is_(200))
        assert_that(simplejson.loads(response.body), is_({
            'en': {'common': {'key': 'en/common'}},
            'fr': {'common': {'key': 'fr/common'}},
        }))
        assert_that(response.headers, has_entry('Cache-Control', 'no-cache'))

    def test_missing_endpoint(self):
        response = self._get('/locales/add?lng=fr&ns=common',
                             method='POST',
                             content_type='application/json',
                             body=b'{"cancel": "Cancel"}')
        assert_that(response.body, is_(b'ok'))
        assert_that(self.connector.missing,
                    is_([(['fr'], 'common', 'cancel', 'Cancel')]))

    def test_missing_backend_is_not_found(self):
        self.translator.backend_connector = None
        response = self._get('/locales/resources.json?lng=en&ns=common')
        assert_that(response.status_int, is_(404))
        assert_that('no backend configured' in response.text, is_(True))
