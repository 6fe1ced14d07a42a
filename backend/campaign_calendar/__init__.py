"""Campaign calendar access and interchange service."""
