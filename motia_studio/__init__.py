"""Motia Studio: project/deployment state store, deployment lifecycle and code generation."""

__version__ = "0.1.0"
