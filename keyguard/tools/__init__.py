"""Developer tools for the keyguard message codec."""
