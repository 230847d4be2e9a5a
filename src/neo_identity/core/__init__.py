"""Core module for neo-identity: exceptions, value objects and shared results."""
