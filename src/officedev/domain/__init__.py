"""Domain layer: capabilities, documents, device errors and operation results."""
