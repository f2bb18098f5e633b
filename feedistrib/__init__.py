"""Weekly fee distribution to vote-escrowed stakers, in proportion to voting power."""

__version__ = "1.0.0"
__all__ = ["contract", "errors", "state", "utils"]