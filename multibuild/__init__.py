"""multibuild - build every Maven and Gradle project under a directory."""

__version__ = "0.1.0"
