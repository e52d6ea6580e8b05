"""Django project configuration package (settings for development and tests)."""
