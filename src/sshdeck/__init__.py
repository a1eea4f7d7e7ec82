"""sshdeck - catalogue of SSH host shortcuts."""
