"""Find Python interpreters and identify their venv, virtualenv or virtualenvwrapper environments."""

__version__ = "0.1.0"