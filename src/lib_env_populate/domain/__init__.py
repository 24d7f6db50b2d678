"""Domain layer: error taxonomy, field reflection, duration grammar."""
