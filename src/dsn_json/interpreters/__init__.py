"""Section interpreters for the parts of the DSN grammar a schema alone cannot describe."""
