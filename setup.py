#!/usr/bin/env python

from setuptools import setup
import potty
# It seems questionable to import the package when it is not installed.
# But sphinx does it, so it must be okay.

long_description = """\
potty reads GNU gettext translation catalogs (.po and .pot files) into
a simple message model and writes them back."""

packages = ['potty']
scriptnames = ['potcat']
scripts = ['bin/%s' % scriptname
           for scriptname in scriptnames]

setup(name='potty',
      version=potty.__version__,
      author='potty development team',
      maintainer='potty development team',
      description='potty, a gettext catalog reader and writer',
      long_description=long_description,
      platforms='all',
      packages=packages,
      scripts=scripts,
      python_requires='>=3.6',
      extras_require={'test': ['pytest']},
      license='GPL')
