"""gatling-scaffold: scaffold and statically validate Gatling load-test projects."""

__version__ = "0.1.0"
