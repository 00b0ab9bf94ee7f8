#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
The built-in language detectors.

Each detector extracts raw (unnormalized, unvalidated) language
candidates from one part of a Pyramid request. They are registered as
named :class:`~.ILanguageDetector` utilities by this package's
``includeme``; the names are the ones used in the ``order`` setting.
"""

import math

from zope import interface

from nti.app.pyramid_i18next.interfaces import ILanguageDetector

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'BUILTIN_DETECTORS',
    'CookieDetector',
    'HeaderDetector',
    'PathDetector',
    'QuerystringDetector',
    'SessionDetector',
    'parse_accept_language',
]

DEFAULT_COOKIE_NAME = 'i18next'
DEFAULT_PARAM_NAME = 'lng'


def _session(request):
    # Pyramid raises AttributeError for ``request.session`` when
    # no session factory is configured.
    return getattr(request, 'session', None)


@interface.implementer(ILanguageDetector)
class QuerystringDetector(object):

    def detect(self, request, options):
        name = options.lookup_querystring or DEFAULT_PARAM_NAME
        return request.GET.get(name) or None


@interface.implementer(ILanguageDetector)
class CookieDetector(object):

    def detect(self, request, options):
        name = options.lookup_cookie or DEFAULT_COOKIE_NAME
        return request.cookies.get(name) or None


@interface.implementer(ILanguageDetector)
class SessionDetector(object):

    def detect(self, request, options):
        session = _session(request)
        if session is None:
            return None
        return session.get(options.lookup_session or DEFAULT_PARAM_NAME) or None


def _quality(params):
    for param in params:
        name, _, value = param.partition('=')
        if name.strip() != 'q':
            continue
        try:
            quality = float(value)
        except ValueError:
            continue
        # Non-finite values count as non-numeric
        if math.isfinite(quality):
            return quality
    return 1.0


def parse_accept_language(header):
    """
    Return the language tags of an ``Accept-Language`` header value,
    most preferred first.

    A missing or non-numeric ``q`` parameter counts as 1. Tags with
    equal quality keep the order in which they appeared in the header.

        >>> parse_accept_language('en-GB;q=0.8,en-US;q=0.9,fr;q=0.9')
        ['en-US', 'fr', 'en-GB']
    """
    weighted = []
    for entry in (header or '').split(','):
        parts = entry.split(';')
        tag = parts[0].strip()
        if not tag:
            continue
        weighted.append((tag, _quality(parts[1:])))
    # sorted() is stable
    weighted = sorted(weighted, key=lambda pair: pair[1], reverse=True)
    return [tag for tag, _ in weighted]


@interface.implementer(ILanguageDetector)
class HeaderDetector(object):

    def detect(self, request, options):
        return parse_accept_language(request.headers.get('Accept-Language')) or None


@interface.implementer(ILanguageDetector)
class PathDetector(object):
    """
    Looks first at the route parameter named by ``lookup_path``
    (only once routing has populated the matchdict), then at the
    path segment numbered ``lookup_from_path_index``.
    """

    def detect(self, request, options):
        found = None
        matchdict = getattr(request, 'matchdict', None)
        if options.lookup_path is not None and matchdict:
            found = matchdict.get(options.lookup_path)

        index = options.lookup_from_path_index
        if not found and index is not None:
            parts = request.path_info.split('/')
            if parts[0] == '':
                # '/foo' -> ['', 'foo']
                parts = parts[1:]
            if len(parts) > index:
                found = parts[index]
        return found or None


BUILTIN_DETECTORS = {
    'querystring': QuerystringDetector(),
    'cookie': CookieDetector(),
    'session': SessionDetector(),
    'header': HeaderDetector(),
    'path': PathDetector(),
}


def register_builtin_detectors(registry):
    """
    Register the built-ins as named utilities in *registry*, leaving
    alone any name that already has a detector.
    """
    for name, detector in BUILTIN_DETECTORS.items():
        if registry.queryUtility(ILanguageDetector, name=name) is None:
            registry.registerUtility(detector, ILanguageDetector, name=name)
