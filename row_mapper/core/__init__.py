"""Core types: configuration, converter registry, row protocols, errors."""
