#!/usr/bin/env python
# encoding: utf-8
# pip install wheel
# python3 setup.py sdist bdist_wheel
# python3 -m twine upload --repository pypi dist/*
from setuptools import setup

setup(
    name="tmxdecode",
    version="1.0",
    description="Decodes tiled tmx layer data, properties and wang ids",
    author="bitcraft",
    author_email="leif.theden@gmail.com",
    packages=["tmxdecode"],
    license="LGPLv3",
    long_description="Decoders for the layer data, typed properties and wang ids of Tiled tmx maps",
    python_requires=">=3.7",
    install_requires=["zstandard>=0.18"],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Intended Audience :: Developers",
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Games/Entertainment",
        "Topic :: Software Development :: Libraries",
    ],
)
