#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Choosing a language for a request.

Detectors are consulted in the configured order and their candidates
flattened into a single list; only then is each candidate normalized
and checked against the whitelist. The first one that passes wins.
Nothing here writes to the request, the options or the registry, so
resolving the same request twice gives the same answer.
"""

from zope import component

from nti.app.pyramid_i18next.detectors import BUILTIN_DETECTORS

from nti.app.pyramid_i18next.interfaces import ILanguageDetector

from nti.app.pyramid_i18next.options import DEFAULT_ORDER

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'accepted_languages',
    'collect_candidates',
    'detect_language',
    'effective_order',
    'find_detector',
]


def effective_order(order):
    if order and isinstance(order, (list, tuple)):
        return tuple(order)
    return DEFAULT_ORDER


def _registry_for(request, registry):
    if registry is not None:
        return registry
    registry = getattr(request, 'registry', None)
    return registry if registry is not None else component.getSiteManager()


def find_detector(name, registry):
    """
    The detector registered under *name*, falling back to the built-in
    of that name. None if there is neither.
    """
    detector = registry.queryUtility(ILanguageDetector, name=name)
    if detector is None:
        detector = BUILTIN_DETECTORS.get(name)
    return detector


def collect_candidates(request, options, registry=None, order=None):
    """
    Return the raw candidates of every detector in *order* (the
    options' order if not given), flattened one level.
    """
    registry = _registry_for(request, registry)
    candidates = []
    for name in effective_order(order if order is not None else options.order):
        detector = find_detector(name, registry)
        if detector is None:
            continue
        found = detector.detect(request, options)
        if not found:
            continue
        if isinstance(found, str):
            candidates.append(found)
        else:
            candidates.extend(found)
    return candidates


def accepted_languages(request, options, language_utils, registry=None, order=None):
    """
    Yield the normalized candidates that pass the whitelist, in order.
    """
    for candidate in collect_candidates(request, options, registry, order):
        code = language_utils.format_language_code(candidate)
        if language_utils.is_whitelisted(code):
            yield code


def detect_language(request, options, language_utils, registry=None, order=None):
    """
    Return the first accepted language for *request*, or the configured
    fallback (which may be None).

    :keyword order: If given, overrides ``options.order`` for this
        call only.
    """
    for code in accepted_languages(request, options, language_utils, registry, order):
        return code
    return options.fallback
