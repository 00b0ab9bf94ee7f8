#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
A small resource-store translator and its language utilities.

Applications may supply any :class:`~.ITranslator`; this one keeps
bundles in memory (optionally filled by a backend) and follows the
i18next conventions for keys: ``namespace:key`` selects a namespace
and dots descend into nested mappings.
"""

import copy
import re
import threading

from zope import interface

from zope.cachedescriptors.property import Lazy

from zope.i18n import interpolate

from zope.i18n.locales import LoadLocaleError
from zope.i18n.locales import locales

from nti.app.pyramid_i18next.backend import BackendConnector

from nti.app.pyramid_i18next.interfaces import ILanguageUtils
from nti.app.pyramid_i18next.interfaces import ITranslator

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'LanguageUtils',
    'Translator',
]

# Script subtags that are written in title case.
_SCRIPT_SUBTAGS = ('hans', 'hant', 'latn', 'cyrl', 'cans', 'mong', 'arab')

# Anything else must never reach the locale data loader, which
# builds file names out of the parts.
_LOCALE_ID = re.compile(r'^[A-Za-z]{2,8}(-[A-Za-z0-9]{1,8}){0,2}$')


@interface.implementer(ILanguageUtils)
class LanguageUtils(object):
    """
    Formats and validates language codes.

    With an explicit *whitelist*, only its members are supported (or,
    with *non_explicit_whitelist*, any code whose language part is a
    member). Without one, a code is supported when locale data for it
    is available from :mod:`zope.i18n.locales`.
    """

    def __init__(self, whitelist=None, non_explicit_whitelist=False, lower_case=False):
        self.whitelist = list(whitelist) if whitelist else None
        self.non_explicit_whitelist = non_explicit_whitelist
        self.lower_case = lower_case

    def format_language_code(self, code):
        code = code.strip().replace('_', '-')
        if '-' not in code:
            return code.lower()

        parts = code.split('-')
        if self.lower_case:
            return '-'.join(p.lower() for p in parts)

        parts[0] = parts[0].lower()
        if len(parts) == 2:
            parts[1] = parts[1].upper()
            if parts[1].lower() in _SCRIPT_SUBTAGS:
                parts[1] = parts[1].capitalize()
        elif len(parts) == 3:
            if len(parts[1]) == 2:
                parts[1] = parts[1].upper()
            if parts[0] != 'sgn' and len(parts[2]) == 2:
                parts[2] = parts[2].upper()
            if parts[1].lower() in _SCRIPT_SUBTAGS:
                parts[1] = parts[1].capitalize()
            if parts[2].lower() in _SCRIPT_SUBTAGS:
                parts[2] = parts[2].capitalize()
        return '-'.join(parts)

    def get_language_part(self, code):
        if not code or '-' not in code:
            return code
        return self.format_language_code(code.split('-')[0])

    def is_whitelisted(self, code):
        if not code:
            return False
        if self.whitelist is None:
            return self._has_locale_data(code)
        if self.non_explicit_whitelist:
            code = self.get_language_part(code)
        return code in self.whitelist

    def _has_locale_data(self, code):
        if not _LOCALE_ID.match(code):
            return False
        parts = (code.split('-') + [None, None])[:3]
        try:
            locales.getLocale(*parts)
        except LoadLocaleError:
            return False
        return True

    def to_resolve_hierarchy(self, code, fallback=None):
        """
        The codes to look in for a translation, most specific first:
        the code, its language part, then the fallback.
        """
        result = []
        for candidate in (code, self.get_language_part(code), fallback):
            if candidate and candidate not in result:
                result.append(candidate)
        return result


@interface.implementer(ITranslator)
class Translator(object):
    """
    An in-memory :class:`~.ITranslator`.

    :param resources: Initial bundles, ``{language: {namespace: {key: value}}}``.
    :param backend: If given, an object with ``read(language, namespace)``
        and ``create(languages, namespace, key, fallback_value)`` used by
        the :class:`~.BackendConnector`.
    :param executor: Passed to the connector; backend calls run on it.
    """

    def __init__(self, resources=None, namespaces=('translation',),
                 default_namespace=None, fallback_language='dev',
                 whitelist=None, non_explicit_whitelist=False,
                 backend=None, executor=None,
                 key_separator='.', ns_separator=':'):
        self.namespaces = list(namespaces)
        self.default_namespace = default_namespace or (self.namespaces[0]
                                                       if self.namespaces
                                                       else 'translation')
        self.fallback_language = fallback_language
        self.whitelist = whitelist
        self.non_explicit_whitelist = non_explicit_whitelist
        self.key_separator = key_separator
        self.ns_separator = ns_separator
        self._store = {}
        self._lock = threading.Lock()
        self.backend_connector = None
        if backend is not None:
            self.backend_connector = BackendConnector(backend, self, executor)
        for language, bundles in (resources or {}).items():
            for namespace, bundle in bundles.items():
                self.add_resource_bundle(language, namespace, bundle)

    @Lazy
    def language_utils(self):
        return LanguageUtils(self.whitelist, self.non_explicit_whitelist)

    def ensure_namespace(self, namespace):
        with self._lock:
            if namespace in self.namespaces:
                return False
            self.namespaces.append(namespace)
        logger.debug("Registered namespace %s", namespace)
        return True

    def add_resource_bundle(self, language, namespace, resources):
        """
        Merge *resources* into the stored bundle, replacing existing keys.
        """
        with self._lock:
            bundle = self._store.setdefault(language, {}).setdefault(namespace, {})
            bundle.update(copy.deepcopy(resources or {}))

    def get_resource_bundle(self, language, namespace):
        bundle = self._store.get(language, {}).get(namespace)
        return copy.deepcopy(bundle) if bundle is not None else None

    def get_resource(self, language, namespace, key):
        value = self._store.get(language, {}).get(namespace)
        for part in key.split(self.key_separator):
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value if isinstance(value, str) else None

    def translate(self, key, options=None):
        options = dict(options or {})
        language = options.pop('lng', None) or self.fallback_language
        namespace = options.pop('ns', None) or self.default_namespace
        default = options.pop('default', None)

        if self.ns_separator and self.ns_separator in key:
            namespace, key = key.split(self.ns_separator, 1)

        for code in self.language_utils.to_resolve_hierarchy(language,
                                                             self.fallback_language):
            value = self.get_resource(code, namespace, key)
            if value is not None:
                return interpolate(value, options)

        if default is not None:
            return interpolate(default, options)
        return key

    t = translate
