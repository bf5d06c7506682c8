"""Unit tests for the domain layer and configuration."""
