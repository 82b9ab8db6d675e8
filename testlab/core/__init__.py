"""Core client implementation for the Test Lab APIs."""
