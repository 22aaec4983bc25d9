"""Game domain services: roster setup, pairing rotation, scoring, question drawing.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics. Only ``reference_data`` and ``oracle`` touch
the network.
"""
