#!/usr/bin/env python
"""
Setup script for arkpage
"""

from setuptools import setup, find_packages

setup(
    name="arkpage",
    version="1.0.0",
    description="Disk-cached page server for ZIP comic archives",
    author="arkpage Contributors",
    license="BSD-2-Clause",
    package_dir={"": "src/python"},
    packages=find_packages("src/python"),
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=9.1.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "arkpage=arkpage.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
)
