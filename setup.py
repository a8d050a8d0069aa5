#!/usr/bin/env python3
"""
Setup script for gsmpy.
"""

from setuptools import setup, find_packages

setup(
    name="gsmpy",
    version="0.1.0",
    description="Python library for controlling AT-command GSM modems over a serial line",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pyserial>=3.5",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-timeout>=2.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gsm-cli=gsmpy.cli:main",
        ],
    },
    keywords=["gsm", "modem", "cellular", "at-commands", "sms", "sim800", "sim7000", "gnss"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Communications",
        "Topic :: System :: Hardware :: Hardware Drivers",
        "Operating System :: POSIX :: Linux",
        "License :: OSI Approved :: MIT License",
    ],
)
