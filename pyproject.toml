[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "pharmastock"
version = "0.1.0"
description = "Pharmacy inventory, sales recording and sales statistics kept in plain text files"
requires-python = ">=3.10"
dependencies = []
keywords = ["pharmacy", "inventory", "point-of-sale", "sales", "stock"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pharmastock = "pharmastock.cli:main"

[tool.setuptools.packages.find]
include = ["pharmastock*"]

[tool.pytest.ini_options]
addopts = "-ra"
