"""Core detection logic: manifest reader, lexer, pattern catalog, rule engine."""
