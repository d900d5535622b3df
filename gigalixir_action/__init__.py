"""Deploy an application to Gigalixir from a CI job."""

__version__ = "0.1.0"
