"""Classification engine: parse, build registry, walk, classify."""
