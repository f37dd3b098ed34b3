"""Application layer for Monnayeur."""
