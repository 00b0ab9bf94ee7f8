import codecs

from setuptools import find_packages
from setuptools import setup

TESTS_REQUIRE = [
    'coverage',
    'fudge',
    'nti.testing',
    'PyHamcrest',
    'zope.testrunner',
]


def _read(fname):
    with codecs.open(fname, encoding='utf-8') as f:
        return f.read()


setup(
    name='nti.app.pyramid_i18next',
    version="0.0.1.dev0",
    author='Jason Madden',
    author_email='jason@nextthought.com',
    description="i18next-style language detection and resource endpoints for Pyramid.",
    long_description=(_read('README.rst') + '\n\n' + _read("CHANGES.rst")),
    license='Apache',
    keywords='pyramid i18n i18next locale negotiation',
    classifiers=[
        'Framework :: Pyramid',
        'Framework :: Zope :: 3',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Development Status :: 3 - Alpha',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy',
        'Topic :: Software Development :: Internationalization',
    ],
    url="https://github.com/NextThought/nti.app.pyramid_i18next",
    zip_safe=True,
    packages=find_packages('src'),
    package_dir={'': 'src'},
    include_package_data=True,
    tests_require=TESTS_REQUIRE,
    install_requires=[
        'PyYAML',
        'pyramid',
        'setuptools',
        'simplejson',
        'zope.cachedescriptors',
        'zope.component',
        'zope.i18n',
        'zope.interface',
    ],
    extras_require={
        'test': TESTS_REQUIRE,
        'docs':  [
            'Sphinx',
            'repoze.sphinx.autointerface',
            'sphinx_rtd_theme',
        ] + TESTS_REQUIRE,
    },
    python_requires=">=3.8",
)
