"""Word Cascade: letter-grid word puzzle engine and LLM bench."""
