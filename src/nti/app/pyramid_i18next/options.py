#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Configuration values for detection and the endpoint views.
"""

import os

from pyramid.settings import asbool
from pyramid.settings import aslist

from zope import interface

from nti.app.pyramid_i18next.interfaces import IDetectionOptions

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'DEFAULT_ORDER',
    'DetectionOptions',
    'SETTINGS_PREFIX',
]

DEFAULT_ORDER = ('querystring', 'cookie', 'header')

#: Thirty days, in seconds.
DEFAULT_MAX_AGE = 60 * 60 * 24 * 30

SETTINGS_PREFIX = 'i18next.'

_INT_SETTINGS = ('lookup_from_path_index', 'max_age')


@interface.implementer(IDetectionOptions)
class DetectionOptions(object):
    """
    An immutable bag of options. Class attributes are the defaults.

    ``lookup_cookie`` and ``lookup_session`` default to None: the
    detectors then read the conventional names, but the resolved
    language is only written back when a name was configured.
    """

    order = DEFAULT_ORDER
    fallback = None
    lookup_querystring = 'lng'
    lookup_cookie = None
    lookup_cookie_domain = None
    lookup_session = None
    lookup_path = None
    lookup_from_path_index = None
    cache = None
    max_age = DEFAULT_MAX_AGE
    property_param = 'query'
    lng_param = 'lng'
    ns_param = 'ns'
    path = None

    _OPTION_NAMES = frozenset((
        'order', 'fallback',
        'lookup_querystring', 'lookup_cookie', 'lookup_cookie_domain',
        'lookup_session', 'lookup_path', 'lookup_from_path_index',
        'cache', 'max_age',
        'property_param', 'lng_param', 'ns_param', 'path',
    ))

    def __init__(self, **kwargs):
        for name, value in kwargs.items():
            if name not in self._OPTION_NAMES:
                raise TypeError("Unknown option %r" % name)
            if name == 'order' and value is not None:
                value = tuple(value)
            self.__dict__[name] = value

    def __setattr__(self, name, value):
        raise AttributeError("DetectionOptions are immutable; use replace()")

    def replace(self, **kwargs):
        values = dict(self.__dict__)
        values.update(kwargs)
        return type(self)(**values)

    @property
    def cache_enabled(self):
        if self.cache is not None:
            return bool(self.cache)
        return os.getenv('PYRAMID_ENV') == 'production'

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, self.__dict__)

    @classmethod
    def from_settings(cls, settings, prefix=SETTINGS_PREFIX):
        """
        Build options from a Pyramid settings mapping. Only keys
        beginning with *prefix* and naming a known option are used;
        values are strings as read from an ini file.
        """
        kwargs = {}
        for key, value in (settings or {}).items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):]
            if name not in cls._OPTION_NAMES:
                continue
            if name == 'order':
                value = aslist(value, flatten=True)
            elif name == 'cache':
                value = asbool(value)
            elif name in _INT_SETTINGS:
                value = int(value)
            elif isinstance(value, str):
                value = value.strip() or None
            kwargs[name] = value
        return cls(**kwargs)
