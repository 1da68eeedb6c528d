[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tigerc"
version = "0.1.0"
description = "Abstract syntax, scoped symbol tables, pretty printing and type checking for the Tiger language"
requires-python = ">=3.10"
dependencies = []
keywords = ["tiger", "compiler", "type-checker", "abstract-syntax", "semantic-analysis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tigerc"]

[tool.pytest.ini_options]
addopts = "-ra"
