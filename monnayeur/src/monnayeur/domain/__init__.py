"""Domain layer for Monnayeur."""
