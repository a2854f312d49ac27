"""Identity verification for tokens issued by the external auth provider."""
