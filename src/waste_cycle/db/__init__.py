"""Database helpers for the waste-cycle backend."""
