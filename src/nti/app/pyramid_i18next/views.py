#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Views serving resource bundles to clients and collecting the keys
clients could not translate.

Both views are plain callables taking a request. When their options
name a ``path``, requests for any other path raise
:class:`pyramid.exceptions.PredicateMismatch`, which makes Pyramid
continue looking for another view.
"""

import datetime

import simplejson

from pyramid.exceptions import PredicateMismatch

from pyramid.httpexceptions import HTTPNotFound

from nti.app.pyramid_i18next.interfaces import ITranslator

from nti.app.pyramid_i18next.options import DetectionOptions

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'MissingKeyView',
    'ResourceBundleView',
    'get_missing_key_handler',
    'get_resources_handler',
    'set_path',
]

NO_BACKEND_MESSAGE = "nti.app.pyramid_i18next:: no backend configured"

ESCAPED_SEPARATOR = '###'


def set_path(target, path, value):
    """
    Set *value* in the nested mapping *target*, creating intermediate
    mappings as needed.

    *path* is either a dotted string or a sequence of keys. A key
    containing ``###`` is a single key with each ``###`` replaced by
    a literal dot.
    """
    keys = path.split('.') if isinstance(path, str) else list(path)
    keys = [key.replace(ESCAPED_SEPARATOR, '.') for key in keys]
    for key in keys[:-1]:
        if not target.get(key):
            target[key] = {}
        target = target[key]
    target[keys[-1]] = value


def _request_body(request):
    if request.content_type == 'application/json':
        return request.json_body
    return request.POST


def request_property(request, name):
    """
    The request mapping the endpoint parameters are read from.
    """
    if name == 'query':
        return request.GET
    if name == 'body':
        return _request_body(request)
    if name == 'matchdict':
        return request.matchdict or {}
    return getattr(request, name)


def _split(value):
    return value.split(' ') if value else []


class _AbstractTranslatorView(object):

    def __init__(self, translator=None, options=None):
        self.translator = translator
        self.options = options if options is not None else DetectionOptions()

    def _check_path(self, request):
        if self.options.path and request.path_info != self.options.path:
            raise PredicateMismatch(self.options.path)

    def _translator(self, request):
        if self.translator is not None:
            return self.translator
        return request.registry.queryUtility(ITranslator)

    def _backend_connector(self, request):
        connector = getattr(self._translator(request), 'backend_connector', None)
        if connector is None:
            raise HTTPNotFound(NO_BACKEND_MESSAGE)
        return connector

    def _params(self, request):
        return request_property(request, self.options.property_param)


class ResourceBundleView(_AbstractTranslatorView):
    """
    Responds with ``{language: {namespace: bundle}}`` for the
    space-separated languages and namespaces requested, once the
    backend has loaded them.
    """

    def _set_cache_headers(self, response):
        if self.options.cache_enabled:
            max_age = self.options.max_age
            response.headers['Cache-Control'] = 'public, max-age=%d' % max_age
            response.expires = datetime.timedelta(seconds=max_age)
        else:
            response.headers['Pragma'] = 'no-cache'
            response.headers['Cache-Control'] = 'no-cache'

    def __call__(self, request):
        self._check_path(request)
        connector = self._backend_connector(request)
        translator = self._translator(request)

        params = self._params(request)
        languages = _split(params.get(self.options.lng_param))
        namespaces = _split(params.get(self.options.ns_param))

        for namespace in namespaces:
            translator.ensure_namespace(namespace)

        response = request.response
        self._set_cache_headers(response)

        connector.load(languages, namespaces).result()

        resources = {}
        for language in languages:
            for namespace in namespaces:
                set_path(resources, [language, namespace],
                         translator.get_resource_bundle(language, namespace))

        response.content_type = 'application/json'
        response.body = simplejson.dumps(resources).encode('utf-8')
        return response


class MissingKeyView(_AbstractTranslatorView):
    """
    Forwards each ``key: default`` entry of the request body to the
    backend as missing from the requested language and namespace.
    """

    def __call__(self, request):
        self._check_path(request)
        connector = self._backend_connector(request)

        params = self._params(request)
        language = params.get(self.options.lng_param)
        namespace = params.get(self.options.ns_param)

        pending = [connector.save_missing([language], namespace, key, value)
                   for key, value in _request_body(request).items()]
        for future in pending:
            future.result()

        response = request.response
        response.content_type = 'text/plain'
        response.body = b'ok'
        return response


def get_resources_handler(translator=None, options=None):
    return ResourceBundleView(translator, options)


def get_missing_key_handler(translator=None, options=None):
    return MissingKeyView(translator, options)
