#!/usr/bin/python3
# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
import codecs
import os
import sys

from setuptools import find_packages, setup

if sys.version_info < (3, 8):
    sys.stderr.write("FATAL ERROR: ")
    sys.stderr.write("bedlist requires at least Python 3.8, but setup.py ")
    sys.stderr.write("was run using Python %s.%s!\n" % sys.version_info[:2])
    sys.exit(1)


def _get_version():
    """Retrieve version from current install directory."""
    env = {}
    with open(os.path.join("src", "bedlist", "__init__.py")) as handle:
        exec(handle.read(), env)

    return env["__version__"]


def _get_readme():
    """Retrieves contents of README.rst, forcing UTF-8 encoding."""
    with codecs.open("README.rst", encoding="utf-8") as handle:
        return handle.read()


setup(
    name="bedlist",
    version=_get_version(),
    description="Conversion of BED files to Picard-style interval lists",
    long_description=_get_readme(),
    long_description_content_type="text/x-rst",
    author="Mikkel Schubert",
    author_email="MikkelSch@gmail.com",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.8",
    ],
    keywords="bioinformatics bed interval_list picard sequence-dictionary",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "coloredlogs>=10.0",
        "configargparse>=0.13.0",
        "humanfriendly>=8.0",
        "pysam>=0.10.0",
        "setproctitle>=1.1.0",
    ],
    extras_require={
        "dev": [
            "nox",
            "pytest",
            "pytest-cov",
        ],
        "lint": [
            "ruff",
        ],
    },
    entry_points={"console_scripts": ["bedlist=bedlist.main:entry_point"]},
    zip_safe=False,
)
