"""Summary statistics over generated boarding sequences."""
