#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Support for request-based language detection in Pyramid applications,
in the manner of i18next.

Detection
=========

The language of a request is found by asking a series of
:class:`~nti.app.pyramid_i18next.interfaces.ILanguageDetector` objects,
in the order given by the ``i18next.order`` setting (by default
``querystring cookie header``). Built-in detectors look at a query
parameter, a cookie, the session, the ``Accept-Language`` header and
the request path; others can be added with
``config.add_language_detector(name, detector)`` and then named in the
order.

All candidates are gathered first. Each is then normalized and checked
against the whitelist of the translator's
:class:`~nti.app.pyramid_i18next.interfaces.ILanguageUtils`; the first
one accepted is the request's language. If none is, the
``i18next.fallback`` setting is used, and failing that the request
has no language and translations fall back to the translator's own
default.

When the ``path`` detector is configured but the request path is only
meaningful once routing has produced a matchdict, a second, path-only
detection is made after the context is found (or on the first
translation, if that comes earlier).

Binding
=======

When a language is found it is stored on the request
(``request.language``, ``request.lng`` and ``request._LOCALE_``), sent
in the ``Content-Language`` response header, and optionally written
to a cookie (``i18next.lookup_cookie``) and the session
(``i18next.lookup_session``). The request's ``t`` method translates
using that language.

Endpoints
=========

Setting ``i18next.resources_path`` adds a view serving resource bundles
as JSON; ``i18next.missing_path`` adds a view recording keys clients
could not translate. Both need a translator with a backend connector.

Usage
=====

::

    config.include('nti.app.pyramid_i18next')
    config.set_translator(Translator(whitelist=['en', 'ru'], backend=...))

"""

from pyramid.interfaces import IContextFound
from pyramid.interfaces import INewRequest
from pyramid.interfaces import IRequest

from zope.i18n.interfaces import IUserPreferredLanguages

from nti.app.pyramid_i18next.adapters import DetectedPreferredLanguages
from nti.app.pyramid_i18next.adapters import resolved_locale_negotiator

from nti.app.pyramid_i18next.detectors import register_builtin_detectors

from nti.app.pyramid_i18next.interfaces import IDetectionOptions
from nti.app.pyramid_i18next.interfaces import ILanguageDetector
from nti.app.pyramid_i18next.interfaces import ITranslator

from nti.app.pyramid_i18next.options import DetectionOptions

from nti.app.pyramid_i18next.subscribers import bind_request_translation
from nti.app.pyramid_i18next.subscribers import resolve_deferred_language

from nti.app.pyramid_i18next.views import MissingKeyView
from nti.app.pyramid_i18next.views import ResourceBundleView

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

RESOURCES_ROUTE = 'nti.app.pyramid_i18next.resources'
MISSING_ROUTE = 'nti.app.pyramid_i18next.missing'


def add_language_detector(config, name, detector):
    """
    Config directive registering *detector* under *name*, replacing any
    detector already registered with that name.
    """
    def register():
        config.registry.registerUtility(detector, ILanguageDetector, name=name)
    config.action(('i18next-detector', name), register)


def set_translator(config, translator):
    """
    Config directive registering the application's :class:`.ITranslator`.
    """
    def register():
        config.registry.registerUtility(translator, ITranslator)
    config.action(ITranslator, register)


def includeme(config):
    settings = config.get_settings() or {}
    options = DetectionOptions.from_settings(settings)
    # The routes do the path matching for these views
    view_options = options.replace(path=None)
    registry = config.registry
    registry.registerUtility(options, IDetectionOptions)
    register_builtin_detectors(registry)
    registry.registerAdapter(DetectedPreferredLanguages,
                             (IRequest,), IUserPreferredLanguages)

    config.add_directive('add_language_detector', add_language_detector)
    config.add_directive('set_translator', set_translator)

    config.add_subscriber(bind_request_translation, INewRequest)
    config.add_subscriber(resolve_deferred_language, IContextFound)
    config.set_locale_negotiator(resolved_locale_negotiator)

    resources_path = settings.get('i18next.resources_path')
    if resources_path:
        config.add_route(RESOURCES_ROUTE, resources_path)
        config.add_view(ResourceBundleView(options=view_options),
                        route_name=RESOURCES_ROUTE)

    missing_path = settings.get('i18next.missing_path')
    if missing_path:
        config.add_route(MISSING_ROUTE, missing_path)
        config.add_view(MissingKeyView(options=view_options),
                        route_name=MISSING_ROUTE,
                        request_method='POST')
    logger.debug("Configured language detection with %r", options)
