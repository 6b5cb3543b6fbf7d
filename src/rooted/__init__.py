"""rooted: daily wellness suggestions from adherence, mood and biometrics."""

__version__ = "0.1.0"
