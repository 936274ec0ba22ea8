"""Session-level runtime objects: selectors, session, engine handle."""
