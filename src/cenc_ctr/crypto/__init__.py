"""Low-level building blocks: block cipher, counter arithmetic and keystream."""
