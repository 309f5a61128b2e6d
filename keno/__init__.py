"""Keno game engine: random draws, pay table scoring and game lifecycle workflows."""
