"""go-template-sh: Go microservice scaffolder."""

__version__ = "0.1.0"
