#!/usr/bin/env python
import os

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))


def read_requirements():
    with open(os.path.join(here, "requirements.txt")) as fp:
        return [row.strip() for row in fp if row.strip()]


about = {}
with open(os.path.join(here, "exiftool_tools", "__init__.py"), "r") as f:
    exec(f.read(), about)


def readme():
    with open(os.path.join(here, "README.md")) as f:
        return f.read()


setup(
    name="exiftool_tools",
    version=about["VERSION"],
    description="Read and write image metadata with ExifTool",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="BSD",
    python_requires=">=3.9",
    packages=[
        "exiftool_tools",
        "exiftool_tools.commands",
    ],
    entry_points="""
      [console_scripts]
      exiftool_tools=exiftool_tools.commands.__main__:main
      """,
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
)
