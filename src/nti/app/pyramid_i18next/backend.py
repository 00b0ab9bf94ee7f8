#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Backend connector and a filesystem backend.

Backends are simple synchronous objects with two methods,
``read(language, namespace) -> dict`` and
``create(languages, namespace, key, fallback_value)``. The
:class:`BackendConnector` turns them into the future-returning
:class:`~.IBackendConnector` contract, either running the calls
inline or submitting them to an executor.
"""

import os
import threading

from concurrent.futures import Future

import simplejson
import yaml

from zope import interface

from nti.app.pyramid_i18next.interfaces import IBackendConnector

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'BackendConnector',
    'FilesystemBackend',
    'completed',
]


def completed(result=None):
    """
    A future that is already done with *result*.
    """
    future = Future()
    future.set_result(result)
    return future


def _run_inline(func, *args):
    future = Future()
    try:
        future.set_result(func(*args))
    except Exception as e: # pylint:disable=broad-except
        # Delivered to whoever calls result()
        future.set_exception(e)
    return future


@interface.implementer(IBackendConnector)
class BackendConnector(object):

    def __init__(self, backend, store, executor=None):
        self.backend = backend
        self.store = store
        self.executor = executor

    def _submit(self, func, *args):
        if self.executor is not None:
            return self.executor.submit(func, *args)
        return _run_inline(func, *args)

    def _load(self, languages, namespaces):
        for language in languages:
            for namespace in namespaces:
                logger.debug("Loading %s/%s", language, namespace)
                data = self.backend.read(language, namespace)
                self.store.add_resource_bundle(language, namespace, data)

    def load(self, languages, namespaces):
        return self._submit(self._load, list(languages), list(namespaces))

    def save_missing(self, languages, namespace, key, fallback_value):
        return self._submit(self.backend.create,
                            list(languages), namespace, key, fallback_value)


def _is_yaml(path):
    return path.endswith(('.yaml', '.yml'))


_SEPARATORS = tuple(sep for sep in ('/', '\\', os.sep, os.altsep) if sep)


def _check_segment(value):
    # Languages and namespaces come from clients; each must fill
    # exactly one path segment of the template.
    if (not value
            or value in ('.', '..')
            or '\0' in value
            or any(sep in value for sep in _SEPARATORS)):
        raise ValueError("Invalid language or namespace %r" % (value,))
    return value


class FilesystemBackend(object):
    """
    Reads bundles from files named by *load_path*, a template with
    ``{lng}`` and ``{ns}`` placeholders, e.g.
    ``/srv/locales/{lng}/{ns}.json``. Files ending in ``.yaml`` or
    ``.yml`` are parsed as YAML, anything else as JSON.

    Missing keys are written to *add_path* (default: *load_path*)
    as JSON or YAML by the same rule.

    A language or namespace that is empty, ``.``, ``..`` or contains a
    path separator raises :exc:`ValueError` before any file is touched.
    """

    def __init__(self, load_path, add_path=None):
        self.load_path = load_path
        self.add_path = add_path or load_path
        self._write_lock = threading.Lock()

    def _read_file(self, path):
        with open(path, encoding='utf-8') as f:
            if _is_yaml(path):
                return yaml.safe_load(f) or {}
            return simplejson.load(f)

    def _write_file(self, path, data):
        directory = os.path.dirname(path)
        if directory and not os.path.isdir(directory):
            os.makedirs(directory)
        with open(path, 'w', encoding='utf-8') as f:
            if _is_yaml(path):
                yaml.safe_dump(data, f, allow_unicode=True, default_flow_style=False)
            else:
                simplejson.dump(data, f, indent=2, sort_keys=True)

    @staticmethod
    def _format(template, language, namespace):
        return template.format(lng=_check_segment(language),
                               ns=_check_segment(namespace))

    def read(self, language, namespace):
        path = self._format(self.load_path, language, namespace)
        if not os.path.exists(path):
            logger.debug("No resources at %s", path)
            return {}
        return self._read_file(path)

    def create(self, languages, namespace, key, fallback_value):
        paths = [self._format(self.add_path, language, namespace)
                 for language in languages]
        with self._write_lock:
            for path in paths:
                data = self._read_file(path) if os.path.exists(path) else {}
                if key not in data:
                    data[key] = fallback_value
                    self._write_file(path, data)
