"""Infrastructure: settings, logging and exceptions."""
