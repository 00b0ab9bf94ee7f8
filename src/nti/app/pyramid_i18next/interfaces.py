#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
I18N related interfaces.

.. $Id$
"""

from zope import interface

from zope.interface import Attribute

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)


class ILanguageDetector(interface.Interface):
    """
    One source of language candidates for a request.

    Detectors are registered as named utilities; the name is what
    appears in the ``order`` setting.
    """

    def detect(request, options):
        """
        Return a single raw language tag, a sequence of raw tags in
        preference order, or None if this source has nothing to say.

        Implementations must not modify the request or the options.
        """


class IDetectionOptions(interface.Interface):
    """
    The per-installation settings for detection and the two
    endpoint views. See :class:`nti.app.pyramid_i18next.options.DetectionOptions`.
    """

    order = Attribute("Sequence of detector names, highest precedence first.")
    fallback = Attribute("Language used when nothing is detected, or None.")


class ILanguageUtils(interface.Interface):
    """
    Normalization and whitelisting of language codes.
    """

    def format_language_code(code):
        """
        Return the canonical spelling of *code* (e.g. ``en-us`` -> ``en-US``).
        """

    def is_whitelisted(code):
        """
        Is the (already formatted) *code* supported by the application?
        """


class IBackendConnector(interface.Interface):
    """
    Loads resource bundles into a translator and records missing keys.

    Both operations may complete asynchronously; they return a
    :class:`concurrent.futures.Future` whose ``result()`` blocks until
    the work is done and re-raises any failure.
    """

    def load(languages, namespaces):
        """
        Load every (language, namespace) pair into the translator's store.
        """

    def save_missing(languages, namespace, key, fallback_value):
        """
        Record that *key* is missing from *namespace* in *languages*.
        """


class ITranslator(interface.Interface):
    """
    The translation engine a request's language is bound to.
    """

    language_utils = Attribute("An :class:`ILanguageUtils`.")
    backend_connector = Attribute("An :class:`IBackendConnector`, or None.")
    namespaces = Attribute("The list of registered namespace names.")

    def ensure_namespace(namespace):
        """
        Register *namespace* if it is not already known.

        Safe to call concurrently and repeatedly; returns True only for
        the call that actually added it.
        """

    def get_resource_bundle(language, namespace):
        """
        Return a copy of the key/value mapping for the pair, or None.
        """

    def translate(key, options=None):
        """
        Translate *key*. The *options* mapping may carry ``lng``, ``ns``,
        ``default`` and interpolation values.
        """
