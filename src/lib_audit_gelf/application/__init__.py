"""Application layer: ports and use cases for the event-to-GELF pipeline."""
