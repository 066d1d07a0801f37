"""gitguard - pre-commit and pre-push guards for git repositories."""

__version__ = "0.4.0"
