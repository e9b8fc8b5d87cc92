"""df-sol: scaffold Anchor workspaces for Solana program development."""

__version__ = "0.1.0"
