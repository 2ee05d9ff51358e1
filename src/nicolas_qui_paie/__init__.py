"""Nicolas Qui Paie: civic proposals, votes and contribution levels."""

__version__ = "0.1.0"
