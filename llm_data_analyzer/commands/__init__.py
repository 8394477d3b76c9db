"""CLI commands; importing a module registers its command on the app."""
