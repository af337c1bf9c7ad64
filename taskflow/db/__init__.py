"""Database engine, sessions and table setup."""
