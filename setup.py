# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Setup configuration for the LPPM API.

This makes the package pip-installable.
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Core dependencies
install_requires = [
    "fastapi>=0.109.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic>=2.5.3",
    "pydantic-settings>=2.1.0",
    "sqlalchemy>=2.0.25",
    "httpx>=0.26.0",
    "structlog>=24.1.0",
    "bcrypt>=4.1.2",
    "beautifulsoup4>=4.12.0",
    "phpserialize>=1.3",
    "passlib>=1.7.4",
]

# Development dependencies
dev_requires = [
    "pytest>=7.4.4",
    "pytest-cov>=4.1.0",
    "hypothesis>=6.92.2",
    "ruff>=0.1.11",
    "mypy>=1.8.0",
]

# Production database driver (WordPress runs on MySQL/MariaDB)
mysql_requires = [
    "mysql-connector-python>=8.2.0",
]

setup(
    name="lppm-api",
    version="0.1.0",
    author="LPPM Unila",
    author_email="",
    description="JSON API for LPPM news, documents and site content on a legacy WordPress database",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["lppm", "lppm.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
        "Topic :: Database",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.11",
    install_requires=install_requires,
    extras_require={
        "dev": dev_requires,
        "test": dev_requires,
        "mysql": mysql_requires,
        "all": dev_requires + mysql_requires,
    },
    entry_points={
        "console_scripts": [
            "lppm-server=lppm.main:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
