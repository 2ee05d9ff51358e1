"""HTTP API for Nicolas Qui Paie."""
