[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tiptypes"
version = "0.1.0"
description = "Type terms, unification-based type inference and a cubic control-flow constraint solver for the TIP language"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "type inference",
    "unification",
    "union-find",
    "recursive types",
    "control flow analysis",
    "compilers",
    "TIP",
]
classifiers = [
    "Development Status :: 4 - Beta",
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
packages = ["tiptypes"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
