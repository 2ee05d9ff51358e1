"""Service layer helpers for the Nicolas Qui Paie API."""
