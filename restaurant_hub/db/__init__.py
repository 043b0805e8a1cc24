"""Database engine, session and bootstrap helpers."""
