[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pyenvscan"
version = "0.1.0"
description = "Find Python interpreters on a machine and identify them as venv, virtualenv, virtualenvwrapper or global environments."
requires-python = ">=3.10"
dependencies = []
keywords = ["python", "virtualenv", "venv", "virtualenvwrapper", "environments", "discovery", "interpreter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pyenvscan = "pyenvscan.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pyenvscan"]

[tool.pytest.ini_options]
addopts = "-ra"
