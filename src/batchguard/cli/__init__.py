"""batchguard command-line interface."""
