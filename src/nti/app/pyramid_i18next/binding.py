#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Binding a request to its language.

Detection normally happens once, when the request begins. If nothing
was found then but the ``path`` detector is part of the configured
order, a second, path-only pass is made later, once routing has
filled in the matchdict (see :mod:`.subscribers`) or, at the latest,
on the first call to the request's translate function.
"""

from nti.app.pyramid_i18next.resolver import detect_language

__docformat__ = "restructuredtext en"

logger = __import__('logging').getLogger(__name__)

__all__ = [
    'LanguageResolution',
    'RequestTranslation',
    'set_language',
]

PATH_ONLY_ORDER = ('path',)


class LanguageResolution(object):
    """
    Where a request stands in choosing its language.

    Instances are immutable; a transition returns a new one.
    """

    RESOLVED = 'resolved'
    PENDING_PATH = 'pending-path-detection'
    UNRESOLVED = 'unresolved'

    __slots__ = ('state', 'language')

    def __init__(self, state, language=None):
        object.__setattr__(self, 'state', state)
        object.__setattr__(self, 'language', language)

    def __setattr__(self, name, value):
        raise AttributeError(name)

    @classmethod
    def initial(cls, language, order):
        if language:
            return cls(cls.RESOLVED, language)
        if order and 'path' in order:
            return cls(cls.PENDING_PATH)
        return cls(cls.UNRESOLVED)

    @property
    def pending(self):
        return self.state == self.PENDING_PATH

    def after_path_detection(self, language):
        if not self.pending:
            raise ValueError("No path detection pending in state %s" % self.state)
        if language:
            return type(self)(self.RESOLVED, language)
        return type(self)(self.UNRESOLVED)

    def __repr__(self):
        return '<%s %s %r>' % (type(self).__name__, self.state, self.language)


def _session(request):
    return getattr(request, 'session', None)


def set_language(request, language, options):
    """
    Record *language* on the request and arrange for the response to
    carry it.
    """
    request.language = request.lng = language
    # Pyramid's default locale negotiator reads this
    request._LOCALE_ = language

    lookup_cookie = options.lookup_cookie
    cookie_domain = options.lookup_cookie_domain

    def _apply_language(unused_request, response):
        response.headers['Content-Language'] = language
        if lookup_cookie:
            response.set_cookie(lookup_cookie, language,
                                httponly=False, domain=cookie_domain)

    request.add_response_callback(_apply_language)

    if options.lookup_session:
        session = _session(request)
        if session is not None:
            session[options.lookup_session] = language


class RequestTranslation(object):
    """
    The language state and translate function of one request.
    """

    resolution = LanguageResolution(LanguageResolution.UNRESOLVED)

    def __init__(self, request, translator, options, registry=None):
        self.request = request
        self.translator = translator
        self.options = options
        self.registry = registry

    def _detect(self, order=None):
        return detect_language(self.request, self.options,
                               self.translator.language_utils,
                               self.registry, order)

    def bind(self):
        language = self._detect()
        self.resolution = LanguageResolution.initial(language, self.options.order)
        if language:
            set_language(self.request, language, self.options)
        logger.debug("Language is %s (%s)", language, self.resolution.state)
        return self.resolution

    def resolve(self):
        """
        Return the request's language, making the deferred path-only
        detection pass if it is still pending. None if unresolved.
        """
        if self.resolution.pending:
            language = self._detect(PATH_ONLY_ORDER)
            self.resolution = self.resolution.after_path_detection(language)
            if language:
                set_language(self.request, language, self.options)
            logger.debug("Language from path is %s", language)
        return self.resolution.language

    @property
    def language(self):
        return self.resolution.language

    def translate(self, *args, **kwargs):
        """
        Call the translator with the request's language as the ``lng``
        of the trailing options dictionary (adding one if only a key
        was given). Keyword arguments are folded into that dictionary,
        so ``request.t('cancel', default='Cancel')`` works. The caller's
        dictionary is not modified.
        """
        language = self.resolve()
        args = list(args)
        if len(args) == 1:
            args.append({})
        if args and isinstance(args[-1], dict):
            options = dict(args[-1])
            options.update(kwargs)
            options['lng'] = language
            args[-1] = options
            kwargs = {}
        return self.translator.translate(*args, **kwargs)

    __call__ = translate
