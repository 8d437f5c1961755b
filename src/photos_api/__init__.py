"""Photos API: captioned image posts backed by S3 and SQLite."""
