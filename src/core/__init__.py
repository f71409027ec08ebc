"""Core domain package for dayswithout.

Core contains keyword matching, the cooldown policy and the counter
processor without any Telegram or file-format specific code.
"""
