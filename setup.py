"""SmartCalc - Keypad calculator with a natural-language solver."""
from setuptools import setup, find_packages

setup(
    name="smartcalc",
    version="1.0.0",
    description="Terminal pocket calculator with history and an LLM-backed solver",
    author="Morten Elmstroem Hansen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "smartcalc": ["templates/*"],
    },
    install_requires=[
        "click>=8.1.0",
        "jinja2>=3.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "ollama>=0.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "smartcalc=smartcalc.cli:main",
            "scalc=smartcalc.cli:main",  # Short alias
        ],
    },
    python_requires=">=3.10",
)
