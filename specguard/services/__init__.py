"""Services used by the specguard runner and CLI."""
