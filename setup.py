"""
Setup configuration for the md-to-html package.

This script uses setuptools to package and distribute the md-to-html
library. It also reads the requirements and long description directly
from external files for ease of maintenance.
"""
from setuptools import find_packages, setup

VERSION = "0.1.0"


def read_requirements(filename="requirements.txt"):
    """
    Read requirements from a requirements file.
    """
    with open(filename, encoding="UTF-8") as file:
        return [line.strip() for line in file if line.strip()]


def get_long_description():
    """
    Read README.md file.
    """
    with open("README.md", encoding="utf8") as file:
        return file.read()


setup(
    name="md-to-html",
    description="Convert Markdown headers, paragraphs and links to HTML.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="Apache Licence, Version 2.0",
    version=VERSION,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements(),
    extras_require={"test": read_requirements("requirements-dev.txt")},
    entry_points={
        "console_scripts": [
            "md-to-html=md_to_html.cli:cli",
        ]
    },
    python_requires=">=3.11",
)
