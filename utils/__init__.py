"""Shared helpers: media parsing, notices and chat history persistence."""
