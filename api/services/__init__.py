"""Service layer: model tasks, question editing, exports."""
