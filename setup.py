# setup.py
from setuptools import setup, find_packages

setup(
    name="a11y_audit",
    version="0.1.0",
    description="Headless-browser accessibility audit gate for CI (axe-core + Playwright)",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"a11y_audit": ["templates/*.j2"]},
    install_requires=[
        "playwright>=1.40",
        "aiohttp>=3.9",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "a11y-audit=a11y_audit.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
