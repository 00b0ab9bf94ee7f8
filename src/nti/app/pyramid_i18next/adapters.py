# -*- coding: utf-8 -*-
"""
I18N related adapters.

These let code written against :mod:`zope.i18n` and Pyramid's own
localization machinery see the same language the request was bound to.
"""

import pyramid.interfaces

from pyramid.i18n import default_locale_negotiator
from pyramid.interfaces import ILocaleNegotiator

from zope import component
from zope import interface

from zope.i18n.interfaces import IUserPreferredLanguages

from nti.app.pyramid_i18next.interfaces import IDetectionOptions
from nti.app.pyramid_i18next.interfaces import ITranslator

from nti.app.pyramid_i18next.options import DetectionOptions

from nti.app.pyramid_i18next.resolver import accepted_languages

__docformat__ = "restructuredtext en"

__all__ = [
    'DetectedPreferredLanguages',
    'resolved_locale_negotiator',
]


@interface.implementer(IUserPreferredLanguages)
@component.adapter(pyramid.interfaces.IRequest)
class DetectedPreferredLanguages(object):
    """
    Every supported language the configured detectors find for the
    request, in precedence order, without the fallback.
    """

    def __init__(self, request):
        self.request = request

    def getPreferredLanguages(self):
        registry = self.request.registry
        translator = registry.queryUtility(ITranslator)
        if translator is None:
            return []
        options = registry.queryUtility(IDetectionOptions) or DetectionOptions()
        result = []
        for code in accepted_languages(self.request, options,
                                       translator.language_utils, registry):
            if code not in result:
                result.append(code)
        return result


@interface.provider(ILocaleNegotiator)
def resolved_locale_negotiator(request):
    """
    A pyramid locale negotiator returning the language the request was
    bound to (completing a pending path detection if need be). Falls
    back to Pyramid's default negotiator when the request is unbound
    or unresolved.
    """
    translation = getattr(request, 'translation', None)
    language = translation.resolve() if translation is not None else None
    return language or default_locale_negotiator(request)
