# Copyright 2024, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from setuptools import setup, find_packages
import version

REQUIRES = [
    "requests >= 2.9.1",
]

TESTS_REQUIRE = [
    "pytest",
]

setup(
    author="Aiven",
    author_email="support@aiven.io",
    entry_points={
        "console_scripts": [
            "triespell = triespell.__main__:main",
        ],
    },
    install_requires=REQUIRES,
    extras_require={"test": TESTS_REQUIRE},
    license="Apache 2.0",
    name="triespell",
    packages=find_packages(exclude=["tests"]),
    platforms=["POSIX", "MacOS", "Windows"],
    description="Trie-guided spelling suggestions from a word frequency dictionary",
    long_description=open("README.rst").read(),
    python_requires=">=3.8",
    url="https://aiven.io/",
    version=version.get_project_version("triespell/version.py"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
