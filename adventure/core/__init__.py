"""Core primitives shared by the generator and the player (errors, session events).

Kept free of CLI concerns so they can be reused by the entry points and tests.
"""
