"""Service layer orchestrating editdispatch workflows."""
