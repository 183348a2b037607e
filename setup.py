# setup.py
from setuptools import setup, find_packages

setup(
    name="site_check",
    version="0.1.0",
    description="Browser-driven crawl and smoke checks for one website subsection",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_check": ["templates/*.j2"]},
    install_requires=[
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "Jinja2>=3.1",
        "playwright>=1.40",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "aiohttp>=3.9",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-check=site_check.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
