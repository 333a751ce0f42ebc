"""Configuration: environment, chat model and storage."""
