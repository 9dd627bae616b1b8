"""Shared helpers: settings, logging, file IO."""
