#!/usr/bin/env python
# -*- coding: utf-8 -*-

import threading

from concurrent.futures import Future

from pyramid.request import Request

from zope import interface

from zope.interface.registry import Components

from nti.app.pyramid_i18next.interfaces import IBackendConnector

from nti.app.pyramid_i18next.translator import Translator


def make_request(path='/', registry=None, **kwargs):
    request = Request.blank(path, **kwargs)
    request.registry = registry if registry is not None else Components()
    return request


def make_translator(**kwargs):
    kwargs.setdefault('whitelist', ['en', 'en-US', 'en-GB', 'fr', 'ru'])
    kwargs.setdefault('fallback_language', 'en')
    return Translator(**kwargs)


@interface.implementer(IBackendConnector)
class DelayedBackendConnector(object):
    """
    Completes each load on another thread after *delay* seconds,
    filling the translator with a bundle naming the pair.
    """

    def __init__(self, translator, delay=0.05, error=None):
        self.translator = translator
        self.delay = delay
        self.error = error
        self.loaded = threading.Event()
        self.loads = []
        self.missing = []

    def _complete_later(self, future, work):
        def complete():
            try:
                work()
            except Exception as e: # pylint:disable=broad-except
                future.set_exception(e)
            else:
                future.set_result(None)
        timer = threading.Timer(self.delay, complete)
        timer.daemon = True
        timer.start()
        return future

    def load(self, languages, namespaces):
        self.loads.append((list(languages), list(namespaces)))

        def work():
            if self.error is not None:
                raise self.error
            for language in languages:
                for namespace in namespaces:
                    self.translator.add_resource_bundle(
                        language, namespace,
                        {'key': '%s/%s' % (language, namespace)})
            self.loaded.set()
        return self._complete_later(Future(), work)

    def save_missing(self, languages, namespace, key, fallback_value):
        def work():
            if self.error is not None:
                raise self.error
            self.missing.append((languages, namespace, key, fallback_value))
        return self._complete_later(Future(), work)
