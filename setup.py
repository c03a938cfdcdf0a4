#!/usr/bin/env python3
"""
Setup configuration for Lyrics-Resolver
Resolves Genius lyrics pages from partial track metadata and extracts clean lyrics
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "aiohttp>=3.9.1",
    "asyncio-throttle>=1.0.2",
    "click>=8.1.7",
    "colorama>=0.4.6",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.1",
]

setup(
    name="lyrics-resolver",
    version="1.0.0",
    author="Lyrics-Resolver Team",
    description="Resolve Genius lyrics pages from track metadata and extract clean lyrics text",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lyrics-resolver=lyrics_resolver.main:cli",
        ],
    },
    keywords="lyrics genius music search scraping cli",
)
