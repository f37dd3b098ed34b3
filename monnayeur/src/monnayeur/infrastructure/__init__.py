"""Infrastructure layer for Monnayeur."""
