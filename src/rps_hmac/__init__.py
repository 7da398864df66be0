"""Generalized rock-paper-scissors with an HMAC commitment to the computer's move."""

__version__ = "0.1.0"
