"""Route modules included by armory.web.app."""
