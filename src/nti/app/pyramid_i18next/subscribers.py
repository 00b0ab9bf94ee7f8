# -*- coding: utf-8 -*-
"""
I18N related subscribers.

"""

from pyramid.interfaces import IContextFound
from pyramid.interfaces import INewRequest

from zope import component

from nti.app.pyramid_i18next.binding import RequestTranslation

from nti.app.pyramid_i18next.interfaces import IDetectionOptions
from nti.app.pyramid_i18next.interfaces import ITranslator

from nti.app.pyramid_i18next.options import DetectionOptions

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'bind_request_translation',
    'resolve_deferred_language',
]


@component.adapter(INewRequest)
def bind_request_translation(event):
    """
    Detects the language of a new request and gives the request
    ``i18next`` (the translator), ``translation`` (the
    :class:`.RequestTranslation`) and ``t`` (its translate function).

    Does nothing if no :class:`.ITranslator` is registered.
    """
    request = event.request
    registry = request.registry
    translator = registry.queryUtility(ITranslator)
    if translator is None:
        logger.debug("No translator registered; not detecting language")
        return

    options = registry.queryUtility(IDetectionOptions)
    if options is None:
        options = DetectionOptions()

    translation = RequestTranslation(request, translator, options, registry)
    request.i18next = translator
    request.translation = translation
    request.t = translation.translate
    translation.bind()


@component.adapter(IContextFound)
def resolve_deferred_language(event):
    """
    Routing and traversal are done, so route parameters are available;
    finish a pending path-only detection now rather than waiting for
    the first translation.
    """
    translation = getattr(event.request, 'translation', None)
    if translation is not None:
        translation.resolve()
