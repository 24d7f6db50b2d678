"""Concrete sources and formatters implementing the application ports."""
